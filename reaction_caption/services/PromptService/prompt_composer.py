"""
Instruction text and token budget for a (style, length, hashtags) choice.

The instructions are written in Indonesian because the captions are.
"""

from reaction_caption.entities.generation import (
    ComposedPrompt,
    OutputLength,
    ReactionStyle,
)

STYLE_DIRECTIVES: dict[ReactionStyle, str] = {
    ReactionStyle.AUTO: "Buat caption natural dan relatable",
    ReactionStyle.WOW: "Buat caption dengan ekspresi WOW/KAGET yang viral",
    ReactionStyle.KAGUM: "Buat caption dengan reaksi KAGUM/SATISFYING yang bikin puas",
    ReactionStyle.WHOLESOME: "Buat caption hangat, positif, dan wholesome",
    ReactionStyle.LUCU: "Buat caption lucu, sarkastik, dan menghibur",
    ReactionStyle.MINDBLOWN: "Buat caption dengan reaksi MINDBLOWN yang ekspresif",
}

LENGTH_DIRECTIVES: dict[OutputLength, str] = {
    OutputLength.SHORT: "1-2 baris saja",
    OutputLength.MEDIUM: "3-5 baris",
    OutputLength.LONG: "6-8 baris",
}

BASE_TOKEN_BUDGET: dict[OutputLength, int] = {
    OutputLength.SHORT: 40,
    OutputLength.MEDIUM: 70,
    OutputLength.LONG: 100,
}

# Hashtags cost output tokens on top of the caption body.
HASHTAG_TOKEN_BUDGET: dict[OutputLength, int] = {
    OutputLength.SHORT: 60,
    OutputLength.MEDIUM: 90,
    OutputLength.LONG: 120,
}

FORMAT_SUFFIX = "untuk reels"
EMOJI_DIRECTIVE = "Maksimal 2 emoji."
CAPTION_ONLY_DIRECTIVE = "Tulis langsung caption saja tanpa format."
HASHTAG_DIRECTIVE = "WAJIB akhiri dengan 3-5 hashtag viral."


def _check_tables() -> None:
    tables = {
        "STYLE_DIRECTIVES": (STYLE_DIRECTIVES, ReactionStyle),
        "LENGTH_DIRECTIVES": (LENGTH_DIRECTIVES, OutputLength),
        "BASE_TOKEN_BUDGET": (BASE_TOKEN_BUDGET, OutputLength),
        "HASHTAG_TOKEN_BUDGET": (HASHTAG_TOKEN_BUDGET, OutputLength),
    }
    for table_name, (table, enum_type) in tables.items():
        missing = [member.name for member in enum_type if member not in table]
        if missing:
            raise RuntimeError(f"{table_name} has no entry for {', '.join(missing)}")


_check_tables()


def build_instruction(
    style: ReactionStyle, length: OutputLength, with_hashtags: bool
) -> str:
    instruction = (
        f"{STYLE_DIRECTIVES[style]} {FORMAT_SUFFIX}. "
        f"Panjang: {LENGTH_DIRECTIVES[length]}. "
        f"{EMOJI_DIRECTIVE} {CAPTION_ONLY_DIRECTIVE}"
    )
    if with_hashtags:
        instruction += f" {HASHTAG_DIRECTIVE}"
    return instruction.strip()


def token_budget(length: OutputLength, with_hashtags: bool) -> int:
    table = HASHTAG_TOKEN_BUDGET if with_hashtags else BASE_TOKEN_BUDGET
    return table[length]


def compose_prompt(
    style: ReactionStyle, length: OutputLength, with_hashtags: bool
) -> ComposedPrompt:
    return ComposedPrompt(
        instruction=build_instruction(style, length, with_hashtags),
        max_output_tokens=token_budget(length, with_hashtags),
    )
