from abc import ABC, abstractmethod

from reaction_caption.entities.generation import OutputLength, ReactionStyle
from reaction_caption.entities.media import MediaFile
from reaction_caption.services.MediaService.media_service_interface import (
    ProgressCallback,
)


class CaptionServiceInterface(ABC):
    @abstractmethod
    async def generate_caption(
        self,
        api_key: str,
        media_file: MediaFile,
        style: ReactionStyle,
        length: OutputLength,
        with_hashtags: bool,
        on_progress: ProgressCallback | None = None,
    ) -> str:
        """
        Run the whole pipeline for one user "generate" action.

        Args:
            api_key: Backend credential supplied by the caller
            media_file: The uploaded image or video
            style: Reaction style of the caption
            length: Output length tier
            with_hashtags: Whether the caption must end with hashtags
            on_progress: Optional callback receiving stage labels

        Returns:
            The sanitized caption

        Raises:
            CaptionError: any typed pipeline failure
        """
        raise NotImplementedError
