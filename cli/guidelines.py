"""Guidelines command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging

from guidelines import from_name, summary_lines

logger = logging.getLogger(__name__)


def add_guidelines_subparser(subparsers: argparse._SubParsersAction) -> None:
    guidelines_parser = subparsers.add_parser(
        "guidelines",
        help="Show recommended website image dimensions",
    )
    guidelines_subparsers = guidelines_parser.add_subparsers(
        dest="guidelines_command",
        help="Guidelines command",
    )

    list_parser = guidelines_subparsers.add_parser(
        "list",
        help="List every image type with desktop/mobile sizes",
    )
    list_parser.set_defaults(_cmd=cmd_guidelines_list)

    show_parser = guidelines_subparsers.add_parser(
        "show",
        help="Show a single image type",
    )
    show_parser.add_argument("name", help="Image type name, e.g. hero or logo_square")
    show_parser.set_defaults(_cmd=cmd_guidelines_show)

    guidelines_parser.set_defaults(_guidelines_parser=guidelines_parser)


def cmd_guidelines_list(args: argparse.Namespace) -> int:
    for line in summary_lines():
        logger.info("%s", line)
    return 0


def cmd_guidelines_show(args: argparse.Namespace) -> int:
    image_type = from_name(args.name)
    if image_type is None:
        logger.error("Unknown image type: %s", args.name)
        return 1
    logger.info(
        "%s: desktop=%s mobile=%s ratio=%s",
        image_type.name,
        image_type.desktop,
        image_type.mobile,
        image_type.ratio,
    )
    return 0
