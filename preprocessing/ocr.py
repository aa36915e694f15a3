"""
OCR preprocessing stages.

Each stage is a pure function from an image buffer to a new image buffer.
Rotation and grayscale are delegated to the buffer; contrast and
binarization are per-pixel maps implemented here.
"""

import numpy as np

from config import CONTRAST_MIDPOINT, OCR_BINARIZE_THRESHOLD

from .buffer import ImageBuffer
from .contrast import ContrastLevel

WHITE = 255
BLACK = 0


def rotate(image: ImageBuffer, radians: float) -> ImageBuffer:
    """Rotate an image to correct tilt or skew.

    An angle of exactly 0.0 returns the same image object; any other angle
    is delegated to the buffer, which may change the canvas dimensions.

    Args:
        image: The input image.
        radians: Rotation angle in radians (positive = counterclockwise).
    """
    if radians == 0.0:
        return image
    return image.rotate(radians)


def grayscale(image: ImageBuffer) -> ImageBuffer:
    """Convert to grayscale with the buffer's weighted-luminance filter.

    Output dimensions and alpha match the input.
    """
    return image.grayscale_filter()


def contrast_lut(factor: float) -> np.ndarray:
    """Lookup table mapping every channel value through the contrast formula.

    ``clamp(round((value - 128) * factor + 128))`` with round-half-to-even,
    clamped after rounding.

    Returns:
        (256,) uint8 array indexed by the input channel value.
    """
    values = np.arange(256, dtype=np.float64)
    adjusted = np.rint((values - CONTRAST_MIDPOINT) * factor + CONTRAST_MIDPOINT)
    return np.clip(adjusted, 0, 255).astype(np.uint8)


def contrast(image: ImageBuffer, level: ContrastLevel) -> ImageBuffer:
    """Scale each RGB channel's distance from the midpoint by the level's factor.

    Alpha passes through unchanged. A Normal level leaves RGB bit-identical.
    """
    lut = contrast_lut(level.factor)

    def adjust(pixels: np.ndarray) -> np.ndarray:
        result = pixels.copy()
        result[:, :, :3] = lut[pixels[:, :, :3]]
        return result

    return image.map_pixels(adjust)


def binarize(image: ImageBuffer, threshold: int = OCR_BINARIZE_THRESHOLD) -> ImageBuffer:
    """Threshold every pixel to pure black or pure white.

    Brightness is the floor of the mean of R, G and B. Pixels brighter than
    ``threshold`` become white; pixels at or below it become black. Alpha is
    preserved.

    Args:
        image: The input image.
        threshold: Cutoff brightness (0-255); equality maps to black.
    """

    def threshold_pixels(pixels: np.ndarray) -> np.ndarray:
        brightness = pixels[:, :, :3].astype(np.int32).sum(axis=2) // 3
        value = np.where(brightness > threshold, WHITE, BLACK).astype(np.uint8)
        result = np.empty_like(pixels)
        result[:, :, :3] = value[:, :, np.newaxis]
        result[:, :, 3] = pixels[:, :, 3]
        return result

    return image.map_pixels(threshold_pixels)
