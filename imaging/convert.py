"""
Batch image conversions: WebP, thumbnails, placeholders, metadata stripping,
auto-cropping and OCR preparation of files.

Every single-file operation returns a ConversionResult instead of raising on
I/O failure, so a batch keeps going when one file is unreadable. Failures are
logged here and reported to the caller through ``ConversionResult.error``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable

import cv2
import numpy as np
from tqdm import tqdm

from coloring import ColorValue
from config import (
    JPEG_QUALITY,
    PLACEHOLDER_BLUR_RADIUS,
    THUMBNAIL_GUIDELINE,
    THUMBNAIL_TYPES,
)
from errors import ImageIOError
from guidelines import Dimension, from_name
from preprocessing import OCRConfig, RGBAImage, run_pipeline

from .io import load_image, save_as_jpeg, save_image, save_step_artifacts

logger = logging.getLogger(__name__)

TRANSPARENT = (0, 0, 0, 0)


@dataclass
class ConversionResult:
    """Outcome of one file operation.

    Attributes:
        source: Input file, or None for generated images.
        output: Written file on success.
        error: Error message on failure.
    """

    source: Path | None
    output: Path | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _attempt(
    source: Path | None,
    description: str,
    operation: Callable[[], Path],
) -> ConversionResult:
    """Run one file operation, turning I/O failures into a failed result."""
    label = source.name if source is not None else description
    try:
        output = operation()
    except ImageIOError as e:
        logger.error("Error %s %s: %s", description, label, e)
        return ConversionResult(source=source, error=f"Error {description} {label}: {e}")
    logger.info("%s -> %s", label, output.name)
    return ConversionResult(source=source, output=output)


def scale_to(image: RGBAImage, width: int, height: int) -> RGBAImage:
    """Resize to exact dimensions (aspect ratio not preserved)."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Target size must be positive, got {width}x{height}")
    interpolation = (
        cv2.INTER_AREA
        if width <= image.width and height <= image.height
        else cv2.INTER_LINEAR
    )
    return RGBAImage(cv2.resize(image.to_array(), (width, height), interpolation=interpolation))


def blur(image: RGBAImage, radius: float = PLACEHOLDER_BLUR_RADIUS) -> RGBAImage:
    """Gaussian blur with the given sigma in pixels."""
    return RGBAImage(cv2.GaussianBlur(image.to_array(), (0, 0), radius))


def crop_to_content(image: RGBAImage, background: ColorValue) -> RGBAImage:
    """Remove border rows and columns whose RGB exactly equals ``background``.

    An image made only of background is returned unchanged.
    """
    rgb = image.pixels[:, :, :3]
    foreground = np.any(rgb != np.array(background.as_tuple(), dtype=np.uint8), axis=2)
    rows = np.flatnonzero(foreground.any(axis=1))
    cols = np.flatnonzero(foreground.any(axis=0))
    if rows.size == 0:
        return image
    return RGBAImage(image.pixels[rows[0]:rows[-1] + 1, cols[0]:cols[-1] + 1])


def thumbnail_dimension(thumb_type: str) -> Dimension:
    """Thumbnail size for "desktop" or "mobile" from the guideline registry.

    Raises:
        ValueError: If thumb_type is not a known variant.
    """
    thumb_type = thumb_type.lower()
    if thumb_type not in THUMBNAIL_TYPES:
        raise ValueError(
            f"Unknown thumbnail type '{thumb_type}', expected one of {', '.join(THUMBNAIL_TYPES)}"
        )
    guideline = from_name(THUMBNAIL_GUIDELINE)
    return guideline.desktop if thumb_type == "desktop" else guideline.mobile


def convert_file_to_webp(input_file: Path, output_dir: Path) -> ConversionResult:
    """Convert one image to lossless WebP named ``<stem>.webp``."""
    input_file = Path(input_file)

    def operation() -> Path:
        image = load_image(input_file)
        return save_image(image, Path(output_dir) / f"{input_file.stem}.webp", lossless=True)

    return _attempt(input_file, "converting", operation)


def convert_to_webp(input_files: Iterable[Path], output_dir: Path) -> list[ConversionResult]:
    files = list(input_files)
    logger.info("Converting %d images to WEBP...", len(files))
    return [
        convert_file_to_webp(f, output_dir)
        for f in tqdm(files, desc="Converting", disable=None)
    ]


def create_file_thumbnail(input_file: Path, output_dir: Path, thumb_type: str) -> ConversionResult:
    """Scale one image to the thumbnail size, saved as ``<type>-<stem>.webp``."""
    input_file = Path(input_file)
    dimension = thumbnail_dimension(thumb_type)

    def operation() -> Path:
        image = load_image(input_file)
        scaled = scale_to(image, dimension.width, dimension.height)
        output = Path(output_dir) / f"{thumb_type.lower()}-{input_file.stem}.webp"
        return save_image(scaled, output)

    return _attempt(input_file, "making thumbnail", operation)


def create_thumbnails(
    input_files: Iterable[Path],
    output_dir: Path,
    thumb_type: str,
) -> list[ConversionResult]:
    files = list(input_files)
    dimension = thumbnail_dimension(thumb_type)
    logger.info("Generating %s thumbnails (%s) for %d images...", thumb_type, dimension, len(files))
    return [
        create_file_thumbnail(f, output_dir, thumb_type)
        for f in tqdm(files, desc="Thumbnails", disable=None)
    ]


def generate_placeholders(
    number: int,
    width: int,
    height: int,
    output_dir: Path,
    fill_color: ColorValue | None = None,
    apply_blur: bool = True,
) -> list[ConversionResult]:
    """Write ``placeholder_1.webp`` .. ``placeholder_<number>.webp``.

    Args:
        number: How many placeholders to write.
        width: Width of each image.
        height: Height of each image.
        output_dir: Destination folder.
        fill_color: Opaque fill; None gives a transparent image.
        apply_blur: Whether to blur the image before saving.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Placeholder size must be positive, got {width}x{height}")

    rgba = fill_color.as_rgba() if fill_color is not None else TRANSPARENT
    image = RGBAImage.filled(width, height, rgba)
    if apply_blur:
        image = blur(image)

    results = []
    for i in range(1, number + 1):
        output = Path(output_dir) / f"placeholder_{i}.webp"
        results.append(
            _attempt(None, f"generating placeholder {i}",
                     lambda output=output: save_image(image, output, lossless=True))
        )
    return results


def strip_metadata(input_file: Path, output_file: Path) -> ConversionResult:
    """Re-encode only the pixels of an image as PNG."""
    input_file = Path(input_file)

    def operation() -> Path:
        return save_image(load_image(input_file), output_file, image_format="PNG")

    return _attempt(input_file, "stripping metadata for", operation)


def autocrop(
    input_file: Path,
    output_file: Path,
    background: ColorValue | None = None,
) -> ConversionResult:
    """Crop away a uniform border of ``background``; copies as-is when None."""
    input_file = Path(input_file)

    def operation() -> Path:
        image = load_image(input_file)
        if background is not None:
            image = crop_to_content(image, background)
        return save_image(image, output_file, lossless=True)

    return _attempt(input_file, "auto-cropping", operation)


def prepare_ocr_file(
    input_file: Path,
    output_file: Path,
    config: OCRConfig | None = None,
    artifact_dir: Path | None = None,
    quality: int = JPEG_QUALITY,
) -> ConversionResult:
    """Load an image, run the OCR preprocessing pipeline and save the result.

    JPEG output uses ``quality``; other formats are written losslessly.
    When ``artifact_dir`` is given, every intermediate stage is saved there.
    """
    input_file = Path(input_file)
    output_file = Path(output_file)

    def operation() -> Path:
        results = run_pipeline(load_image(input_file), config)
        for step in results.steps:
            logger.debug("%s: %s", step.name, results.step_metadata[step.key]["status"])
        if artifact_dir is not None:
            save_step_artifacts(results, artifact_dir)
        if output_file.suffix.lower() in (".jpg", ".jpeg"):
            return save_as_jpeg(results.final, output_file, quality)
        return save_image(results.final, output_file, lossless=True)

    return _attempt(input_file, "preparing OCR image", operation)
