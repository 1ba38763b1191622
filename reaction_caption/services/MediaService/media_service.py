from __future__ import annotations

import asyncio
import base64
import logging

from reaction_caption.entities.errors import (
    MediaTooLargeError,
    UnsupportedMediaTypeError,
    VideoNotSupportedError,
)
from reaction_caption.entities.media import EncodedPayload, MediaFile
from reaction_caption.services.FrameService.frame_extractor_interface import (
    FrameExtractorInterface,
)
from reaction_caption.services.MediaService.media_service_interface import (
    MediaServiceInterface,
    ProgressCallback,
    report_progress,
)

DEFAULT_MAX_FILE_BYTES = 150 * 1024 * 1024


class MediaService(MediaServiceInterface):
    def __init__(
        self,
        frame_extractor: FrameExtractorInterface,
        logger: logging.Logger,
        max_file_bytes: int = DEFAULT_MAX_FILE_BYTES,
        video_supported: bool = True,
    ) -> None:
        self.frame_extractor = frame_extractor
        self.logger = logger
        self.max_file_bytes = max_file_bytes
        self.video_supported = video_supported

    def validate(self, media_file: MediaFile) -> None:
        mime_type = media_file.mime_type or ""
        if not (mime_type.startswith("image/") or mime_type.startswith("video/")):
            self.logger.info("Rejected %s: unsupported type %s", media_file.name, mime_type)
            raise UnsupportedMediaTypeError(media_file.mime_type)

        if media_file.size_bytes > self.max_file_bytes:
            self.logger.info(
                "Rejected %s: %s bytes exceeds limit of %s bytes",
                media_file.name,
                media_file.size_bytes,
                self.max_file_bytes,
            )
            raise MediaTooLargeError(media_file.size_bytes, self.max_file_bytes)

    async def encode_base64(self, media_file: MediaFile) -> str:
        data = await media_file.read()
        return await asyncio.to_thread(_b64encode, data)

    async def build_payloads(
        self,
        media_file: MediaFile,
        on_progress: ProgressCallback | None = None,
    ) -> list[EncodedPayload]:
        if media_file.is_image:
            report_progress(on_progress, "Processing image...")
            encoded = await self.encode_base64(media_file)
            self.logger.info(
                "Encoded image %s (%s bytes)", media_file.name, media_file.size_bytes
            )
            return [{"base64": encoded, "mime_type": media_file.mime_type}]

        if media_file.is_video:
            if not self.video_supported:
                raise VideoNotSupportedError()
            report_progress(on_progress, "Processing video...")
            return await self.frame_extractor.extract(media_file)

        raise UnsupportedMediaTypeError(media_file.mime_type)


def _b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
