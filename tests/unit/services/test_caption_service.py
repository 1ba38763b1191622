"""
Unit tests for CaptionService.

The first group wires real media, prompt and sanitizer code against a mocked
backend; the second isolates the orchestration with mocks.
"""

import asyncio
import json
import logging
from collections.abc import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from reaction_caption.entities.errors import (
    ContentBlocked,
    MediaTooLargeError,
    MissingApiKeyError,
    UnsupportedMediaTypeError,
)
from reaction_caption.entities.generation import OutputLength, ReactionStyle
from reaction_caption.entities.media import MediaFile
from reaction_caption.services.CaptionService.caption_service import CaptionService
from reaction_caption.services.FrameService.frame_extractor import (
    FrameExtractor,
    probe_video_backend,
)
from reaction_caption.services.GenerationService.generation_service import (
    GenerationService,
)
from reaction_caption.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from reaction_caption.services.MediaService.media_service import MediaService
from reaction_caption.services.MediaService.media_service_interface import (
    MediaServiceInterface,
)
from reaction_caption.services.PromptService.prompt_composer import (
    HASHTAG_DIRECTIVE,
    LENGTH_DIRECTIVES,
    STYLE_DIRECTIVES,
)


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}


class Backend:
    def __init__(self, body: dict, status_code: int = 200) -> None:
        self.body = body
        self.status_code = status_code
        self.bodies: list[dict] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.bodies.append(json.loads(request.content))
        return httpx.Response(self.status_code, json=self.body)


def _pipeline(backend: Backend, logger: logging.Logger) -> CaptionService:
    frame_extractor = FrameExtractor(capabilities=probe_video_backend(), logger=logger)
    media_service = MediaService(frame_extractor=frame_extractor, logger=logger)
    generation_service = GenerationService(
        logger=logger,
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(backend)),
    )
    return CaptionService(
        media_service=media_service,
        generation_service=generation_service,
        logger=logger,
    )


class TestPipeline:
    def test_wholesome_medium_image(self, logger: logging.Logger) -> None:
        backend = Backend(_reply("**Hook:** Love this! (so cute)"))
        service = _pipeline(backend, logger)
        progress: list[str] = []

        caption = asyncio.run(
            service.generate_caption(
                api_key="key",
                media_file=MediaFile.from_bytes(b"png-bytes", "image/png", name="cat.png"),
                style=ReactionStyle.WHOLESOME,
                length=OutputLength.MEDIUM,
                with_hashtags=False,
                on_progress=progress.append,
            )
        )

        assert caption == "Love this!"
        body = backend.bodies[0]
        instruction = body["contents"][0]["parts"][0]["text"]
        assert STYLE_DIRECTIVES[ReactionStyle.WHOLESOME] in instruction
        assert LENGTH_DIRECTIVES[OutputLength.MEDIUM] in instruction
        assert HASHTAG_DIRECTIVE not in instruction
        assert body["generationConfig"]["maxOutputTokens"] == 70
        assert body["contents"][0]["parts"][1]["inline_data"]["mime_type"] == "image/png"
        assert progress == ["Processing image...", "Generating caption..."]

    def test_video_sends_one_jpeg_frame(
        self, logger: logging.Logger, make_video: Callable[..., bytes]
    ) -> None:
        backend = Backend(_reply("Sunset vibes"))
        service = _pipeline(backend, logger)
        progress: list[str] = []

        caption = asyncio.run(
            service.generate_caption(
                api_key="key",
                media_file=MediaFile.from_bytes(make_video(), "video/x-msvideo", name="clip.avi"),
                style=ReactionStyle.WOW,
                length=OutputLength.SHORT,
                with_hashtags=True,
                on_progress=progress.append,
            )
        )

        assert caption == "Sunset vibes\n#fyp #viral #trending"
        parts = backend.bodies[0]["contents"][0]["parts"]
        assert len(parts) == 2
        assert parts[1]["inline_data"]["mime_type"] == "image/jpeg"
        assert backend.bodies[0]["generationConfig"]["maxOutputTokens"] == 60
        assert progress == ["Processing video...", "Generating caption..."]

    def test_backend_failure_propagates(self, logger: logging.Logger) -> None:
        backend = Backend({"promptFeedback": {"blockReason": "SAFETY"}})
        service = _pipeline(backend, logger)

        with pytest.raises(ContentBlocked):
            asyncio.run(
                service.generate_caption(
                    api_key="key",
                    media_file=MediaFile.from_bytes(b"img", "image/jpeg"),
                    style=ReactionStyle.AUTO,
                    length=OutputLength.LONG,
                    with_hashtags=False,
                )
            )


@pytest.fixture
def media_service() -> MagicMock:
    service = MagicMock(spec=MediaServiceInterface)
    service.build_payloads = AsyncMock(
        return_value=[{"base64": "aW1n", "mime_type": "image/png"}]
    )
    return service


@pytest.fixture
def generation_service() -> MagicMock:
    service = MagicMock(spec=GenerationServiceInterface)
    service.generate = AsyncMock(return_value="1. Gemes banget")
    return service


@pytest.fixture
def caption_service(
    media_service: MagicMock, generation_service: MagicMock, logger: logging.Logger
) -> CaptionService:
    return CaptionService(
        media_service=media_service,
        generation_service=generation_service,
        logger=logger,
    )


class TestOrchestration:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("api_key", ["", "   "])
    async def test_missing_api_key_rejected_first(
        self,
        caption_service: CaptionService,
        media_service: MagicMock,
        api_key: str,
    ) -> None:
        with pytest.raises(MissingApiKeyError):
            await caption_service.generate_caption(
                api_key=api_key,
                media_file=MediaFile.from_bytes(b"img", "image/png"),
                style=ReactionStyle.AUTO,
                length=OutputLength.SHORT,
                with_hashtags=False,
            )

        media_service.validate.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [UnsupportedMediaTypeError("text/plain"), MediaTooLargeError(10, 5)],
    )
    async def test_invalid_input_stops_before_work(
        self,
        caption_service: CaptionService,
        media_service: MagicMock,
        generation_service: MagicMock,
        error: Exception,
    ) -> None:
        media_service.validate.side_effect = error

        with pytest.raises(type(error)):
            await caption_service.generate_caption(
                api_key="key",
                media_file=MediaFile.from_bytes(b"x", "text/plain"),
                style=ReactionStyle.AUTO,
                length=OutputLength.SHORT,
                with_hashtags=False,
            )

        media_service.build_payloads.assert_not_awaited()
        generation_service.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_passes_composed_prompt_and_sanitizes(
        self,
        caption_service: CaptionService,
        generation_service: MagicMock,
    ) -> None:
        caption = await caption_service.generate_caption(
            api_key=" key ",
            media_file=MediaFile.from_bytes(b"img", "image/png"),
            style=ReactionStyle.LUCU,
            length=OutputLength.LONG,
            with_hashtags=True,
        )

        assert caption == "Gemes banget\n#fyp #viral #trending"
        args = generation_service.generate.await_args.args
        assert args[0] == "key"
        assert args[1] == [{"base64": "aW1n", "mime_type": "image/png"}]
        assert STYLE_DIRECTIVES[ReactionStyle.LUCU] in args[2]
        assert args[2].endswith(HASHTAG_DIRECTIVE)
        assert args[3] == 120

    @pytest.mark.asyncio
    async def test_can_be_cancelled(
        self,
        caption_service: CaptionService,
        generation_service: MagicMock,
    ) -> None:
        started = asyncio.Event()

        async def never_returns(*args, **kwargs):
            started.set()
            await asyncio.sleep(3600)

        generation_service.generate.side_effect = never_returns
        task = asyncio.create_task(
            caption_service.generate_caption(
                api_key="key",
                media_file=MediaFile.from_bytes(b"img", "image/png"),
                style=ReactionStyle.AUTO,
                length=OutputLength.SHORT,
                with_hashtags=False,
            )
        )
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
