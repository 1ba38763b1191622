from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, NamedTuple

from reaction_caption.entities.media import EncodedPayload


class ReactionStyle(str, Enum):
    AUTO = "auto"
    WOW = "wow"
    KAGUM = "kagum"
    WHOLESOME = "wholesome"
    LUCU = "lucu"
    MINDBLOWN = "mindblown"

    @property
    def label(self) -> str:
        return _STYLE_LABELS[self]


class OutputLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"

    @property
    def label(self) -> str:
        return _LENGTH_LABELS[self]


_STYLE_LABELS: dict[ReactionStyle, str] = {
    ReactionStyle.AUTO: "Auto",
    ReactionStyle.WOW: "Wow / Kaget",
    ReactionStyle.KAGUM: "Kagum / Satisfying",
    ReactionStyle.WHOLESOME: "Wholesome",
    ReactionStyle.LUCU: "Lucu / Sarkas",
    ReactionStyle.MINDBLOWN: "Mindblown",
}

_LENGTH_LABELS: dict[OutputLength, str] = {
    OutputLength.SHORT: "Pendek",
    OutputLength.MEDIUM: "Sedang",
    OutputLength.LONG: "Panjang",
}


class ComposedPrompt(NamedTuple):
    instruction: str
    max_output_tokens: int


@dataclass(frozen=True)
class GenerationRequest:
    """One generateContent call; built once per user "generate" action."""

    instruction: str
    payloads: tuple[EncodedPayload, ...]
    max_output_tokens: int
    temperature: float
    top_p: float
    top_k: int

    def to_body(self) -> dict[str, Any]:
        """Render the JSON body expected by the generateContent endpoint."""
        parts: list[dict[str, Any]] = [{"text": self.instruction}]
        for payload in self.payloads:
            parts.append(
                {
                    "inline_data": {
                        "mime_type": payload["mime_type"],
                        "data": payload["base64"],
                    }
                }
            )
        return {
            "contents": [{"parts": parts}],
            "generationConfig": {
                "temperature": self.temperature,
                "topP": self.top_p,
                "topK": self.top_k,
                "maxOutputTokens": self.max_output_tokens,
            },
            "safetySettings": [],
        }
