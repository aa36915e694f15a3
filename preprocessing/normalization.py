"""
Pixel array normalization functions for preprocessing.

All functions are pure: they take an input and return a new output without
mutating the original array. Images are handled as (H, W, 4) uint8 RGBA
arrays throughout the pipeline.
"""

import cv2
import numpy as np

OPAQUE = 255


def to_rgba(img: np.ndarray) -> np.ndarray:
    """Convert an image array to a new (H, W, 4) uint8 RGBA array.

    Pure function: always returns a fresh array, even for RGBA input.

    Args:
        img: Input image. Can be:
             - Grayscale (2D or 1 channel): replicated into RGB, opaque alpha
             - RGB (3 channels): opaque alpha appended
             - RGBA (4 channels): copied
             Integer values outside [0, 255] are clipped.

    Returns:
        RGBA image as a 3D uint8 numpy array.

    Raises:
        TypeError: If img is not a numpy array or has a non-integer dtype.
        ValueError: If img has invalid dimensions, channels, or is empty.

    Examples:
        >>> rgb = np.zeros((100, 200, 3), dtype=np.uint8)
        >>> to_rgba(rgb).shape
        (100, 200, 4)
    """
    if not isinstance(img, np.ndarray):
        raise TypeError(f"Expected numpy.ndarray, got {type(img).__name__}")

    if img.ndim < 2 or img.ndim > 3:
        raise ValueError(
            f"Image must be 2D or 3D array, got {img.ndim}D array with shape {img.shape}"
        )

    if img.size == 0:
        raise ValueError("Image array is empty")

    if not (np.issubdtype(img.dtype, np.integer) or img.dtype == np.bool_):
        raise TypeError(f"Image array must have an integer dtype, got {img.dtype}")

    if img.dtype != np.uint8:
        img = np.clip(img.astype(np.int64), 0, 255).astype(np.uint8)

    if img.ndim == 2:
        img = img[:, :, np.newaxis]

    channels = img.shape[2]
    height, width = img.shape[:2]
    result = np.empty((height, width, 4), dtype=np.uint8)
    if channels in (1, 3):
        # Single channel broadcasts into R, G and B
        result[:, :, :3] = img
        result[:, :, 3] = OPAQUE
    elif channels == 4:
        result[:] = img
    else:
        raise ValueError(
            f"Unsupported number of channels: {channels}. "
            "Expected 1 (grayscale), 3 (RGB), or 4 (RGBA)."
        )
    return result


def to_grayscale_rgba(rgba: np.ndarray) -> np.ndarray:
    """Apply a weighted-luminance grayscale filter to an RGBA array.

    Uses OpenCV's ITU-R BT.601 weights (0.299 R + 0.587 G + 0.114 B) and
    writes the luminance back into all three color channels. Alpha and
    dimensions are unchanged.

    Args:
        rgba: (H, W, 4) uint8 array.

    Returns:
        New (H, W, 4) uint8 array with R == G == B.
    """
    gray = cv2.cvtColor(rgba[:, :, :3].copy(), cv2.COLOR_RGB2GRAY)
    result = np.empty_like(rgba)
    result[:, :, :3] = gray[:, :, np.newaxis]
    result[:, :, 3] = rgba[:, :, 3]
    return result


def rotate_rgba(rgba: np.ndarray, radians: float) -> np.ndarray:
    """Rotate an RGBA array about its center, expanding the canvas to fit.

    Positive angles rotate counterclockwise. Corners uncovered by the
    rotated image are transparent black.

    Args:
        rgba: (H, W, 4) uint8 array.
        radians: Rotation angle in radians.

    Returns:
        New RGBA array; its width and height may differ from the input.
    """
    height, width = rgba.shape[:2]
    center = (width / 2.0, height / 2.0)
    matrix = cv2.getRotationMatrix2D(center, float(np.degrees(radians)), 1.0)

    cos = abs(matrix[0, 0])
    sin = abs(matrix[0, 1])
    new_width = max(1, int(round(height * sin + width * cos)))
    new_height = max(1, int(round(height * cos + width * sin)))

    # Shift so the rotated image is centered on the new canvas
    matrix[0, 2] += new_width / 2.0 - center[0]
    matrix[1, 2] += new_height / 2.0 - center[1]

    return cv2.warpAffine(
        rgba.copy(),
        matrix,
        (new_width, new_height),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_CONSTANT,
        borderValue=(0, 0, 0, 0),
    )
