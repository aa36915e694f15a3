"""
Image file I/O.

Decoding and encoding go through Pillow. This is the only layer that touches
the filesystem; everything it hands to preprocessing is an RGBAImage.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
from PIL import Image

from config import JPEG_QUALITY, SUPPORTED_EXTENSIONS, WEBP_METHOD, WEBP_QUALITY
from errors import ImageIOError
from preprocessing import PipelineStepResults, RGBAImage

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = {f".{ext}" for ext in SUPPORTED_EXTENSIONS}

# Output suffix -> Pillow format name
OUTPUT_FORMATS = {
    ".webp": "WEBP",
    ".jpg": "JPEG",
    ".jpeg": "JPEG",
    ".png": "PNG",
}


def list_images(folder: str | Path) -> list[Path]:
    """Find all supported image files directly inside a folder.

    Args:
        folder: Directory to scan (not recursive).

    Returns:
        Sorted list of image file paths.

    Raises:
        ValueError: If folder doesn't exist or isn't a directory.
    """
    path = Path(folder)
    if not path.is_dir():
        raise ValueError(f"No valid input folder: {path.resolve()}")

    return sorted(
        entry for entry in path.iterdir()
        if entry.is_file() and entry.suffix.lower() in IMAGE_EXTENSIONS
    )


def load_image(path: str | Path) -> RGBAImage:
    """Decode an image file into an RGBAImage.

    Raises:
        ImageIOError: If the file is missing, cannot be decoded, or exceeds
            Pillow's MAX_IMAGE_PIXELS limit.
    """
    try:
        with Image.open(path) as img:
            rgba = np.asarray(img.convert("RGBA"))
    except (OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageIOError(path, f"cannot decode image ({e})") from e
    return RGBAImage(rgba)


def to_pil(image: RGBAImage) -> Image.Image:
    """Convert to a Pillow RGBA image (no metadata attached)."""
    return Image.fromarray(image.to_array())


def save_image(
    image: RGBAImage,
    path: str | Path,
    *,
    quality: int | None = None,
    lossless: bool = False,
    image_format: str | None = None,
) -> Path:
    """Encode an image to disk, creating parent folders as needed.

    The format follows the file suffix unless ``image_format`` is given.
    JPEG output drops the alpha channel. Only pixel data is written; no
    metadata from any source file is carried over.

    Args:
        image: Image to write.
        path: Destination path.
        quality: Encoder quality 0-100 (JPEG default 90, WebP default 80).
        lossless: Lossless WebP at maximum compression effort.
        image_format: Pillow format name overriding the suffix.

    Returns:
        The written path.

    Raises:
        ValueError: If the format is not supported.
        ImageIOError: If encoding or writing fails.
    """
    path = Path(path)
    fmt = image_format or OUTPUT_FORMATS.get(path.suffix.lower())
    if fmt not in OUTPUT_FORMATS.values():
        raise ValueError(f"Unsupported output format for {path.name}: {fmt or path.suffix}")

    pil_image = to_pil(image)
    params: dict = {}
    if fmt == "JPEG":
        pil_image = pil_image.convert("RGB")
        params["quality"] = JPEG_QUALITY if quality is None else quality
    elif fmt == "WEBP":
        params["method"] = WEBP_METHOD
        params["lossless"] = lossless
        if lossless:
            # For lossless WebP, quality is compression effort
            params["quality"] = 100 if quality is None else quality
        else:
            params["quality"] = WEBP_QUALITY if quality is None else quality
    else:
        params["optimize"] = True

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        pil_image.save(path, format=fmt, **params)
    except OSError as e:
        raise ImageIOError(path, f"cannot encode image ({e})") from e

    logger.debug("Wrote %s (%s, %dx%d)", path, fmt, image.width, image.height)
    return path


def save_as_jpeg(image: RGBAImage, path: str | Path, quality: int = JPEG_QUALITY) -> Path:
    """Save an image as JPEG with adjustable quality.

    Raises:
        ValueError: If quality is outside [0, 100].
        ImageIOError: If writing fails.
    """
    if not 0 <= quality <= 100:
        raise ValueError(f"JPEG quality must be within [0, 100], got {quality}")
    return save_image(image, path, quality=quality, image_format="JPEG")


def save_step_artifacts(
    results: PipelineStepResults,
    artifact_dir: str | Path,
) -> dict[str, Path]:
    """Save the original and every applied step's output as PNG.

    Skipped steps (e.g. rotation by 0) produce no artifact.

    Returns:
        Dict mapping "original" and step keys (e.g. "contrast") to paths.
    """
    artifact_dir = Path(artifact_dir)
    paths = {"original": save_image(results.original, artifact_dir / "original.png")}
    for step in results.steps:
        if results.step_metadata.get(step.key, {}).get("status") == "skipped":
            continue
        paths[step.key] = save_image(step.image, artifact_dir / f"{step.key}.png")
    return paths
