"""Batch conversion CLI parsing and control flow (webp, thumbs, placeholders, strip, autocrop)."""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from pathlib import Path

from coloring import ColorValue
from config import (
    DEFAULT_INPUT_DIR,
    DEFAULT_OUTPUT_DIR,
    PLACEHOLDER_COUNT,
    PLACEHOLDER_HEIGHT,
    PLACEHOLDER_WIDTH,
    THUMBNAIL_TYPES,
)
from imaging import (
    ConversionResult,
    autocrop,
    convert_to_webp,
    create_thumbnails,
    generate_placeholders,
    list_images,
    strip_metadata,
)

logger = logging.getLogger(__name__)


def parse_color(value: str) -> ColorValue:
    """argparse type for hex colors."""
    color = ColorValue.from_hex(value)
    if color is None:
        raise argparse.ArgumentTypeError(f"invalid hex color: {value!r}")
    return color


def add_folder_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "input_dir",
        nargs="?",
        default=DEFAULT_INPUT_DIR,
        help=f"Folder with source images (default: {DEFAULT_INPUT_DIR})",
    )
    parser.add_argument(
        "-o", "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Folder for generated files (default: {DEFAULT_OUTPUT_DIR})",
    )


def add_convert_subparsers(subparsers: argparse._SubParsersAction) -> None:
    webp_parser = subparsers.add_parser(
        "webp",
        help="Convert every image in a folder to lossless WebP",
    )
    add_folder_args(webp_parser)
    webp_parser.set_defaults(_cmd=cmd_webp)

    thumbs_parser = subparsers.add_parser(
        "thumbs",
        help="Generate thumbnails for every image in a folder",
    )
    add_folder_args(thumbs_parser)
    thumbs_parser.add_argument(
        "--type",
        dest="thumb_type",
        choices=THUMBNAIL_TYPES + ("both",),
        default="both",
        help="Thumbnail variant to generate (default: both)",
    )
    thumbs_parser.set_defaults(_cmd=cmd_thumbs)

    placeholders_parser = subparsers.add_parser(
        "placeholders",
        help="Generate solid-color placeholder images",
    )
    placeholders_parser.add_argument(
        "-o", "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Folder for generated files (default: {DEFAULT_OUTPUT_DIR})",
    )
    placeholders_parser.add_argument(
        "-n", "--number",
        type=int,
        default=PLACEHOLDER_COUNT,
        help=f"Number of placeholders (default: {PLACEHOLDER_COUNT})",
    )
    placeholders_parser.add_argument("--width", type=int, default=PLACEHOLDER_WIDTH)
    placeholders_parser.add_argument("--height", type=int, default=PLACEHOLDER_HEIGHT)
    color_group = placeholders_parser.add_mutually_exclusive_group()
    color_group.add_argument(
        "--color",
        type=parse_color,
        help="Fill color as hex (default: transparent)",
    )
    color_group.add_argument(
        "--random-color",
        action="store_true",
        help="Fill with a random color",
    )
    placeholders_parser.add_argument(
        "--no-blur",
        action="store_true",
        help="Skip the blur effect",
    )
    placeholders_parser.set_defaults(_cmd=cmd_placeholders)

    strip_parser = subparsers.add_parser(
        "strip",
        help="Re-encode images as PNG without metadata",
    )
    add_folder_args(strip_parser)
    strip_parser.set_defaults(_cmd=cmd_strip)

    autocrop_parser = subparsers.add_parser(
        "autocrop",
        help="Crop a uniform background border from images",
    )
    add_folder_args(autocrop_parser)
    autocrop_parser.add_argument(
        "--background",
        type=parse_color,
        default=ColorValue(255, 255, 255),
        help="Background color to crop as hex (default: #ffffff)",
    )
    autocrop_parser.set_defaults(_cmd=cmd_autocrop)


def report_results(results: list[ConversionResult]) -> int:
    """Log a summary line and return the exit code for a batch."""
    failed = [r for r in results if not r.ok]
    logger.info("Done: %d succeeded, %d failed", len(results) - len(failed), len(failed))
    return 1 if failed else 0


def output_stems(images: list[Path]) -> dict[Path, str]:
    """Output name stem per input file.

    Files sharing a stem (``a.png`` and ``a.jpg``) keep their source suffix,
    e.g. ``a_png`` and ``a_jpg``, so one output never overwrites another.
    """
    counts = Counter(image.stem for image in images)
    stems = {}
    for image in images:
        if counts[image.stem] > 1:
            stems[image] = f"{image.stem}_{image.suffix.lstrip('.').lower()}"
            logger.warning("%s shares its name with another input, writing %s", image.name, stems[image])
        else:
            stems[image] = image.stem
    return stems


def _input_images(args: argparse.Namespace) -> list[Path] | None:
    try:
        images = list_images(args.input_dir)
    except ValueError as e:
        logger.error("%s", e)
        return None
    if not images:
        logger.error("No valid images found in %s", args.input_dir)
        return None
    logger.info("%d images found in %s", len(images), args.input_dir)
    return images


def cmd_webp(args: argparse.Namespace) -> int:
    images = _input_images(args)
    if images is None:
        return 1
    return report_results(convert_to_webp(images, Path(args.output_dir)))


def cmd_thumbs(args: argparse.Namespace) -> int:
    images = _input_images(args)
    if images is None:
        return 1
    thumb_types = THUMBNAIL_TYPES if args.thumb_type == "both" else (args.thumb_type,)
    results = []
    for thumb_type in thumb_types:
        results.extend(create_thumbnails(images, Path(args.output_dir), thumb_type))
    return report_results(results)


def cmd_placeholders(args: argparse.Namespace) -> int:
    if args.number < 1 or args.width < 1 or args.height < 1:
        logger.error("--number, --width and --height must be positive")
        return 1
    fill_color = ColorValue.random() if args.random_color else args.color
    if fill_color is not None:
        logger.info("Fill color: %s", fill_color.to_hex())
    results = generate_placeholders(
        args.number,
        args.width,
        args.height,
        Path(args.output_dir),
        fill_color=fill_color,
        apply_blur=not args.no_blur,
    )
    return report_results(results)


def cmd_strip(args: argparse.Namespace) -> int:
    images = _input_images(args)
    if images is None:
        return 1
    output_dir = Path(args.output_dir)
    stems = output_stems(images)
    return report_results([
        strip_metadata(image, output_dir / f"{stems[image]}.png") for image in images
    ])


def cmd_autocrop(args: argparse.Namespace) -> int:
    images = _input_images(args)
    if images is None:
        return 1
    output_dir = Path(args.output_dir)
    stems = output_stems(images)
    return report_results([
        autocrop(image, output_dir / f"{stems[image]}.webp", args.background)
        for image in images
    ])
