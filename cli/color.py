"""Color command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging

from coloring import Channel, ColorValue
from errors import ValidationError

from .convert import parse_color

logger = logging.getLogger(__name__)


def add_color_subparser(subparsers: argparse._SubParsersAction) -> None:
    color_parser = subparsers.add_parser(
        "color",
        help="Inspect, adjust and mix RGB colors",
    )
    color_subparsers = color_parser.add_subparsers(
        dest="color_command",
        help="Color command",
    )

    hex_parser = color_subparsers.add_parser(
        "hex",
        help="Parse a hex color (3, 6 or 8 digits)",
    )
    hex_parser.add_argument("value", help="Hex color, e.g. '#ff00cc' or 'f0c'")
    hex_parser.set_defaults(_cmd=cmd_color_hex)

    mix_parser = color_subparsers.add_parser(
        "mix",
        help="Blend two colors",
    )
    mix_parser.add_argument("first", type=parse_color)
    mix_parser.add_argument("second", type=parse_color)
    mix_parser.add_argument(
        "--ratio",
        type=float,
        default=0.5,
        help="0.0 = first color, 1.0 = second color (default: 0.5)",
    )
    mix_parser.set_defaults(_cmd=cmd_color_mix)

    adjust_parser = color_subparsers.add_parser(
        "adjust",
        help="Shift channels of a color (results are clamped to 0-255)",
    )
    adjust_parser.add_argument("value", type=parse_color)
    for channel in Channel:
        adjust_parser.add_argument(
            f"--{channel.value}",
            type=int,
            default=0,
            help=f"Amount added to the {channel.value} channel",
        )
    adjust_parser.set_defaults(_cmd=cmd_color_adjust)

    random_parser = color_subparsers.add_parser(
        "random",
        help="Print a random color",
    )
    random_parser.set_defaults(_cmd=cmd_color_random)

    color_parser.set_defaults(_color_parser=color_parser)


def _log_color(label: str, color: ColorValue) -> None:
    logger.info("%s: rgb(%d, %d, %d) %s", label, *color.as_tuple(), color.to_hex())


def cmd_color_hex(args: argparse.Namespace) -> int:
    color = ColorValue.from_hex(args.value)
    if color is None:
        logger.error("Not a valid hex color: %r", args.value)
        return 1
    _log_color("parsed", color)
    return 0


def cmd_color_mix(args: argparse.Namespace) -> int:
    try:
        mixed = args.first.mix_with(args.second, args.ratio)
    except ValidationError as e:
        logger.error("%s", e)
        return 1
    _log_color(f"{args.ratio:.0%} mix", mixed)
    return 0


def cmd_color_adjust(args: argparse.Namespace) -> int:
    adjusted = args.value.increase_all(args.red, args.green, args.blue)
    _log_color("adjusted", adjusted)
    return 0


def cmd_color_random(args: argparse.Namespace) -> int:
    _log_color("random", ColorValue.random())
    return 0
