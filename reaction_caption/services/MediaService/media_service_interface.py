from abc import ABC, abstractmethod
from collections.abc import Callable

from reaction_caption.entities.media import EncodedPayload, MediaFile

ProgressCallback = Callable[[str], None]


def report_progress(on_progress: ProgressCallback | None, message: str) -> None:
    if on_progress is not None:
        on_progress(message)


class MediaServiceInterface(ABC):
    @abstractmethod
    def validate(self, media_file: MediaFile) -> None:
        """Reject unsupported or oversized files by raising InvalidInput."""
        raise NotImplementedError

    @abstractmethod
    async def encode_base64(self, media_file: MediaFile) -> str:
        """Return the raw base64 body of the file, without a data-URI prefix."""
        raise NotImplementedError

    @abstractmethod
    async def build_payloads(
        self,
        media_file: MediaFile,
        on_progress: ProgressCallback | None = None,
    ) -> list[EncodedPayload]:
        """
        Convert a validated file into the payloads sent to the backend.

        Images become a single payload with their declared MIME type; videos
        become a single representative JPEG frame.
        """
        raise NotImplementedError
