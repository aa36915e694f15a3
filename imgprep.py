#!/usr/bin/env python3
"""
Unified CLI for batch image preparation.

Usage:
    imgprep webp [input] -o out           # Convert a folder to lossless WebP
    imgprep thumbs [input] --type mobile  # Generate desktop/mobile thumbnails
    imgprep placeholders --color '#f0c'   # Generate placeholder images
    imgprep strip [input]                 # Re-encode as PNG without metadata
    imgprep autocrop [input]              # Crop a uniform background border
    imgprep ocr <file|folder> --tilt 5    # Prepare images for OCR
    imgprep color hex '#ff00cc'           # Parse / mix / adjust colors
    imgprep guidelines list               # Recommended website image sizes
"""

import argparse
import logging
import sys

from cli.color import add_color_subparser
from cli.convert import add_convert_subparsers
from cli.guidelines import add_guidelines_subparser
from cli.ocr import add_ocr_subparser
from logging_utils import add_logging_args, configure_logging

logger = logging.getLogger(__name__)

# Commands with their own subcommands, and the attribute holding their parser
NESTED_COMMANDS = {
    "color": ("color_command", "_color_parser"),
    "guidelines": ("guidelines_command", "_guidelines_parser"),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="imgprep",
        description="Image preparation - web conversions and OCR preprocessing",
    )
    add_logging_args(parser)
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_convert_subparsers(subparsers)
    add_ocr_subparser(subparsers)
    add_color_subparser(subparsers)
    add_guidelines_subparser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level, args.verbose, args.quiet)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command in NESTED_COMMANDS:
        dest, parser_attr = NESTED_COMMANDS[args.command]
        if getattr(args, dest) is None:
            getattr(args, parser_attr).print_help()
            return 1

    cmd = getattr(args, "_cmd", None)
    if cmd is None:
        parser.print_help()
        return 1
    return cmd(args)


if __name__ == "__main__":
    sys.exit(main())
