"""OCR preparation command CLI parsing and control flow."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from config import (
    DEFAULT_OUTPUT_DIR,
    JPEG_QUALITY,
    OCR_BINARIZE_THRESHOLD,
    OCR_CONTRAST_FACTOR,
    OCR_TILT_DEGREES,
)
from errors import ValidationError
from imaging import IMAGE_EXTENSIONS, list_images, prepare_ocr_file
from preprocessing import OCRConfig

from .convert import output_stems, report_results

logger = logging.getLogger(__name__)

OUTPUT_SUFFIXES = (".webp", ".png", ".jpg", ".jpeg")


def add_ocr_subparser(subparsers: argparse._SubParsersAction) -> None:
    ocr_parser = subparsers.add_parser(
        "ocr",
        help="Prepare images for OCR (rotate, grayscale, contrast, binarize)",
    )
    ocr_parser.add_argument(
        "source",
        help="Image file or folder of images",
    )
    ocr_parser.add_argument(
        "-o", "--output-dir",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Folder for processed images (default: {DEFAULT_OUTPUT_DIR})",
    )
    ocr_parser.add_argument(
        "--tilt",
        type=float,
        default=OCR_TILT_DEGREES,
        help="Rotation in degrees, positive = counterclockwise (default: %(default)s)",
    )
    ocr_parser.add_argument(
        "--contrast",
        type=float,
        default=OCR_CONTRAST_FACTOR,
        help="Contrast factor; 1.0 leaves contrast unchanged (default: %(default)s)",
    )
    ocr_parser.add_argument(
        "--threshold",
        type=int,
        default=OCR_BINARIZE_THRESHOLD,
        help="Binarization brightness threshold 0-255 (default: %(default)s)",
    )
    ocr_parser.add_argument(
        "--no-binarize",
        action="store_true",
        help="Stop after the contrast step",
    )
    ocr_parser.add_argument(
        "--format",
        dest="suffix",
        choices=[s.lstrip(".") for s in OUTPUT_SUFFIXES],
        default="webp",
        help="Output format (default: webp)",
    )
    ocr_parser.add_argument(
        "--quality",
        type=int,
        default=JPEG_QUALITY,
        help="JPEG quality 0-100 (default: %(default)s)",
    )
    ocr_parser.add_argument(
        "--artifacts",
        metavar="DIR",
        help="Save every intermediate step under DIR/<image name>/",
    )
    ocr_parser.set_defaults(_cmd=cmd_ocr)


def _source_images(source: str) -> list[Path]:
    path = Path(source)
    if path.is_file():
        if path.suffix.lower() not in IMAGE_EXTENSIONS:
            raise ValueError(f"{source} is not a supported image file")
        return [path]
    return list_images(path)


def cmd_ocr(args: argparse.Namespace) -> int:
    config = OCRConfig(
        tilt_degrees=args.tilt,
        contrast_factor=args.contrast,
        threshold=args.threshold,
        binarize=not args.no_binarize,
    )
    if not 0 <= args.quality <= 100:
        logger.error("--quality must be within [0, 100], got %s", args.quality)
        return 1
    try:
        config.validate()
        images = _source_images(args.source)
    except (ValidationError, ValueError) as e:
        logger.error("%s", e)
        return 1

    if not images:
        logger.error("No valid images found in %s", args.source)
        return 1

    logger.info("Preparing %d images for OCR...", len(images))
    output_dir = Path(args.output_dir)
    stems = output_stems(images)
    results = []
    for image in images:
        stem = stems[image]
        artifact_dir = Path(args.artifacts) / stem if args.artifacts else None
        output = output_dir / f"ocr_{stem}.{args.suffix}"
        results.append(
            prepare_ocr_file(image, output, config, artifact_dir=artifact_dir, quality=args.quality)
        )
    return report_results(results)
