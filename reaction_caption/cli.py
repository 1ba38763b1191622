"""Command line caller: caption a local image or video file."""

from __future__ import annotations

import argparse
import asyncio
import sys

from reaction_caption.components.configuration.settings import Settings
from reaction_caption.components.logger.logger import Logger
from reaction_caption.dependencies.components import get_components
from reaction_caption.dependencies.services import get_caption_service
from reaction_caption.entities.errors import CaptionError
from reaction_caption.entities.generation import OutputLength, ReactionStyle
from reaction_caption.entities.media import MediaFile


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reaction-caption",
        description="Generate a short reels caption for an image or video.",
    )
    parser.add_argument("file", help="Path to the image or video")
    parser.add_argument(
        "--style",
        choices=[style.value for style in ReactionStyle],
        default=ReactionStyle.AUTO.value,
    )
    parser.add_argument(
        "--length",
        choices=[length.value for length in OutputLength],
        default=OutputLength.MEDIUM.value,
    )
    parser.add_argument(
        "--hashtags", action="store_true", help="End the caption with hashtags"
    )
    parser.add_argument(
        "--mime-type", help="Override the MIME type guessed from the file name"
    )
    parser.add_argument("--api-key", help="Gemini API key (default: GEMINI_API_KEY)")
    parser.add_argument(
        "--env",
        choices=["development", "staging", "production"],
        default="development",
    )
    return parser


async def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    components = get_components(env=args.env)
    logger = components.get_component(Logger).get_logger("cli")
    api_key = args.api_key or components.get_component(Settings).gemini_api_key or ""

    try:
        media_file = MediaFile.from_path(args.file, mime_type=args.mime_type)
    except OSError as exc:
        print(f"Error: cannot open {args.file}: {exc.strerror or exc}", file=sys.stderr)
        return 1

    service = get_caption_service(components)
    try:
        caption = await service.generate_caption(
            api_key=api_key,
            media_file=media_file,
            style=ReactionStyle(args.style),
            length=OutputLength(args.length),
            with_hashtags=args.hashtags,
            on_progress=lambda message: print(message, file=sys.stderr),
        )
    except CaptionError as error:
        logger.warning("Caption generation failed: %s", type(error).__name__)
        print(f"Error: {error}", file=sys.stderr)
        return 1

    print(caption)
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))
