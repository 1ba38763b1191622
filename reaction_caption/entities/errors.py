"""
Error taxonomy for the caption pipeline.

Every error's ``str()`` is the one-line message shown to the user.
"""

from __future__ import annotations


class CaptionError(Exception):
    """Base error for every pipeline failure."""


class InvalidInput(CaptionError):
    """The request was rejected before any expensive work."""


class UnsupportedMediaTypeError(InvalidInput):
    def __init__(self, mime_type: str | None) -> None:
        self.mime_type = mime_type
        super().__init__(
            f"Invalid file type ({mime_type or 'unknown'}). "
            "Please upload an image or video."
        )


class MediaTooLargeError(InvalidInput):
    def __init__(self, size_bytes: int, limit_bytes: int) -> None:
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
        limit_mb = limit_bytes // (1024 * 1024)
        super().__init__(f"File is too large. Maximum size is {limit_mb}MB.")


class MissingApiKeyError(InvalidInput):
    def __init__(self) -> None:
        super().__init__("Please enter your Gemini API key.")


class VideoNotSupportedError(InvalidInput):
    def __init__(self) -> None:
        super().__init__("Video processing is not available on this machine.")


class MediaReadFailure(CaptionError):
    """The file contents could not be read."""


class FrameExtractionFailure(CaptionError):
    """A representative frame could not be derived from the video."""


class VideoLoadError(FrameExtractionFailure):
    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__("Failed to load video." + (f" {detail}" if detail else ""))


class FrameDrawError(FrameExtractionFailure):
    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__("Failed to extract frame." + (f" {detail}" if detail else ""))


class FrameExtractionTimeout(FrameExtractionFailure):
    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"Video frame extraction timed out after {timeout_seconds:g}s.")


class GenerationFailed(CaptionError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.backend_message = message
        self.status_code = status_code
        super().__init__(f"Gemini API error: {message}")


class GenerationTimeout(GenerationFailed):
    def __init__(self, timeout_seconds: float) -> None:
        self.timeout_seconds = timeout_seconds
        super().__init__(f"request timed out after {timeout_seconds:g}s")


class ContentBlocked(CaptionError):
    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Request blocked: {reason}")


class EmptyResponse(CaptionError):
    def __init__(self, message: str = "Empty response from Gemini API") -> None:
        super().__init__(message)


class Truncated(CaptionError):
    def __init__(self) -> None:
        super().__init__(
            "Response was truncated. Please try with a shorter output length."
        )


class MalformedResponse(CaptionError):
    def __init__(self, message: str = "Invalid response structure from Gemini API") -> None:
        super().__init__(message)
