"""
Representative-frame extraction for uploaded videos.

Decoding happens in-process through OpenCV; the frame is rasterised and
JPEG-encoded with Pillow. No subprocess or external transcoder is involved.
"""

from __future__ import annotations

import asyncio
import base64
import contextlib
import logging
import os
import tempfile
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import cv2
from PIL import Image

from reaction_caption.entities.errors import (
    FrameDrawError,
    FrameExtractionTimeout,
    VideoLoadError,
)
from reaction_caption.entities.media import EncodedPayload, MediaFile
from reaction_caption.services.FrameService.frame_extractor_interface import (
    FrameExtractorInterface,
)

FRAME_MIME_TYPE = "image/jpeg"


@dataclass(frozen=True)
class VideoCapabilities:
    """Decoding strategy chosen once at start-up."""

    api_preference: int
    backend_name: str
    video_supported: bool


def probe_video_backend() -> VideoCapabilities:
    """Inspect the OpenCV build for a backend able to decode video files."""
    registry = cv2.videoio_registry
    if registry.hasBackend(cv2.CAP_FFMPEG):
        return VideoCapabilities(cv2.CAP_FFMPEG, "FFMPEG", True)

    stream_backends = list(registry.getStreamBackends())
    if stream_backends:
        backend = stream_backends[0]
        return VideoCapabilities(int(backend), registry.getBackendName(backend), True)

    return VideoCapabilities(cv2.CAP_ANY, "NONE", False)


class FrameExtractor(FrameExtractorInterface):
    def __init__(
        self,
        capabilities: VideoCapabilities,
        logger: logging.Logger,
        width: int = 320,
        height: int = 180,
        jpeg_quality: int = 80,
        seek_fraction: float = 0.25,
        timeout_seconds: float = 20.0,
    ) -> None:
        self.capabilities = capabilities
        self.logger = logger
        self.width = width
        self.height = height
        self.jpeg_quality = jpeg_quality
        self.seek_fraction = seek_fraction
        self.timeout_seconds = timeout_seconds

    async def extract(self, media_file: MediaFile) -> list[EncodedPayload]:
        data = await media_file.read()
        suffix = Path(media_file.name).suffix or ".mp4"

        try:
            # The worker releases its own handles, so an expired wait leaks nothing.
            async with asyncio.timeout(self.timeout_seconds):
                encoded = await asyncio.to_thread(self._extract_sync, data, suffix)
        except TimeoutError as exc:
            self.logger.error(
                "Frame extraction for %s exceeded %ss", media_file.name, self.timeout_seconds
            )
            raise FrameExtractionTimeout(self.timeout_seconds) from exc

        self.logger.info(
            "Extracted %dx%d frame from %s (%d base64 chars)",
            self.width,
            self.height,
            media_file.name,
            len(encoded),
        )
        return [{"base64": encoded, "mime_type": FRAME_MIME_TYPE}]

    def _extract_sync(self, data: bytes, suffix: str) -> str:
        with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as handle:
            handle.write(data)
            video_path = handle.name

        capture: cv2.VideoCapture | None = None
        try:
            capture = cv2.VideoCapture(video_path, self.capabilities.api_preference)
            if not capture.isOpened():
                raise VideoLoadError("The video might be corrupted or in an unsupported format.")

            fps = capture.get(cv2.CAP_PROP_FPS) or 0.0
            frame_count = capture.get(cv2.CAP_PROP_FRAME_COUNT) or 0.0
            target_frame = max(0, int(frame_count * self.seek_fraction))
            if target_frame:
                capture.set(cv2.CAP_PROP_POS_FRAMES, target_frame)

            self.logger.debug(
                "Seeking to frame %d of %d (%.2fs at %.2f fps)",
                target_frame,
                int(frame_count),
                target_frame / fps if fps > 0 else 0.0,
                fps,
            )

            ok, frame = capture.read()
            if not ok or frame is None or frame.size == 0:
                raise FrameDrawError("No decodable frame at the seek position.")

            return self._encode_frame(frame)
        finally:
            if capture is not None:
                capture.release()
            with contextlib.suppress(FileNotFoundError):
                os.unlink(video_path)

    def _encode_frame(self, frame) -> str:
        try:
            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            image = Image.fromarray(rgb).resize((self.width, self.height))
            buffer = BytesIO()
            image.save(buffer, format="JPEG", quality=self.jpeg_quality)
        except (cv2.error, ValueError, OSError) as exc:
            raise FrameDrawError(str(exc)) from exc
        return base64.b64encode(buffer.getvalue()).decode("ascii")
