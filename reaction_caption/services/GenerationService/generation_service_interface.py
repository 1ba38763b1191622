from abc import ABC, abstractmethod
from collections.abc import Sequence

from reaction_caption.entities.media import EncodedPayload


class GenerationServiceInterface(ABC):
    @abstractmethod
    async def generate(
        self,
        api_key: str,
        payloads: Sequence[EncodedPayload],
        instruction: str,
        max_output_tokens: int,
    ) -> str:
        """
        Send one multimodal generation request and return the raw reply text.

        Args:
            api_key: Backend credential, never logged or stored
            payloads: One or more base64 media units
            instruction: Natural-language directive sent before the media
            max_output_tokens: Output budget enforced by the backend

        Returns:
            The concatenated, trimmed text of the first candidate

        Raises:
            GenerationFailed, ContentBlocked, EmptyResponse, Truncated,
            MalformedResponse
        """
        raise NotImplementedError
