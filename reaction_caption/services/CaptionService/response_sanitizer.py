"""
Clean-up of raw model replies into a postable caption.

The rules target the phrasing the backend tends to produce for the prompts in
PromptService; they are heuristics and may need updating if that drifts.
"""

import re

# Applied in order. Only the label rule ignores case. Its colon is optional,
# so a leading label word without one is stripped too ("Isinya" -> "nya").
_CLEANUP_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (
        re.compile(
            r"^(Hook|Isi|Closing|Caption|Berikut|Pilihan|Berikut beberapa):?\s*",
            re.IGNORECASE | re.MULTILINE,
        ),
        "",
    ),
    (re.compile(r"\*\*.*?\*\*"), ""),
    (re.compile(r"^\d+\.\s*", re.MULTILINE), ""),
    (re.compile(r"^[-*]\s*", re.MULTILINE), ""),
    (re.compile(r"\(.*?\)"), ""),
    (re.compile(r"Surga tersembunyi.*$", re.DOTALL), ""),
    (re.compile(r"^\s*-\s*", re.MULTILINE), ""),
)

HASHTAG_POOL: tuple[str, ...] = ("#fyp", "#viral", "#trending", "#reels", "#indonesia")
DEFAULT_HASHTAG_COUNT = 3


def _clean_once(text: str) -> str:
    for pattern, replacement in _CLEANUP_RULES:
        text = pattern.sub(replacement, text)
    return text.strip()


def clean_text(text: str) -> str:
    """Apply the clean-up rules until the text stops changing."""
    cleaned = _clean_once(text)
    while True:
        again = _clean_once(cleaned)
        if again == cleaned:
            return cleaned
        cleaned = again


def default_hashtags() -> str:
    return " ".join(HASHTAG_POOL[:DEFAULT_HASHTAG_COUNT])


def sanitize_caption(raw_text: str, with_hashtags: bool) -> str:
    cleaned = clean_text(raw_text)
    if with_hashtags and "#" not in cleaned:
        return "\n".join(part for part in (cleaned, default_hashtags()) if part)
    return cleaned
