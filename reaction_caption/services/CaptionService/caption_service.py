from __future__ import annotations

import logging

from langfuse import observe

from reaction_caption.entities.errors import MissingApiKeyError
from reaction_caption.entities.generation import OutputLength, ReactionStyle
from reaction_caption.entities.media import MediaFile
from reaction_caption.services.CaptionService.caption_service_interface import (
    CaptionServiceInterface,
)
from reaction_caption.services.CaptionService.response_sanitizer import (
    sanitize_caption,
)
from reaction_caption.services.GenerationService.generation_service_interface import (
    GenerationServiceInterface,
)
from reaction_caption.services.MediaService.media_service_interface import (
    MediaServiceInterface,
    ProgressCallback,
    report_progress,
)
from reaction_caption.services.PromptService.prompt_composer import compose_prompt


class CaptionService(CaptionServiceInterface):
    """
    Media validation, payload encoding, prompt composition, generation and
    sanitisation for a single upload.

    Holds no per-request state; concurrent calls for one session are the
    caller's responsibility to prevent.
    """

    def __init__(
        self,
        media_service: MediaServiceInterface,
        generation_service: GenerationServiceInterface,
        logger: logging.Logger,
    ) -> None:
        self.media_service = media_service
        self.generation_service = generation_service
        self.logger = logger

    # Input capture is off so the API key never reaches the trace.
    @observe(capture_input=False)
    async def generate_caption(
        self,
        api_key: str,
        media_file: MediaFile,
        style: ReactionStyle,
        length: OutputLength,
        with_hashtags: bool,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        if not api_key or not api_key.strip():
            raise MissingApiKeyError()

        self.media_service.validate(media_file)

        self.logger.info(
            "Generating caption for %s (%s, %s bytes): style=%s length=%s hashtags=%s",
            media_file.name,
            media_file.mime_type,
            media_file.size_bytes,
            style.value,
            length.value,
            with_hashtags,
        )

        payloads = await self.media_service.build_payloads(media_file, on_progress)
        prompt = compose_prompt(style, length, with_hashtags)

        report_progress(on_progress, "Generating caption...")
        raw_text = await self.generation_service.generate(
            api_key.strip(),
            payloads,
            prompt.instruction,
            prompt.max_output_tokens,
        )

        caption = sanitize_caption(raw_text, with_hashtags)
        self.logger.debug("Sanitized %d raw characters to %d", len(raw_text), len(caption))
        return caption
