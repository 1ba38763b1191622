from abc import ABC, abstractmethod

from reaction_caption.entities.media import EncodedPayload, MediaFile


class FrameExtractorInterface(ABC):
    @abstractmethod
    async def extract(self, media_file: MediaFile) -> list[EncodedPayload]:
        """
        Derive the representative still frame of a video.

        Returns:
            Exactly one JPEG payload.

        Raises:
            FrameExtractionFailure: the video could not be loaded, decoded or
                rasterised, or the work did not finish in time.
        """
        raise NotImplementedError
