"""
Image buffer abstraction used by the OCR preprocessing stages.

The stages only rely on the ImageBuffer protocol. RGBAImage is the concrete
buffer: an immutable wrapper around a read-only (H, W, 4) uint8 numpy array
that delegates rotation and grayscale filtering to OpenCV.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Protocol, runtime_checkable

import numpy as np

from .normalization import rotate_rgba, to_grayscale_rgba, to_rgba

# (red, green, blue, alpha), each in [0, 255]
Pixel = tuple[int, int, int, int]

# Vectorized pixel map: receives the read-only (H, W, 4) array, returns a new one
PixelMap = Callable[[np.ndarray], np.ndarray]


@runtime_checkable
class ImageBuffer(Protocol):
    """Capabilities the preprocessing stages need from a decoded image.

    Every method returns a new buffer; implementations must never modify
    the buffer they are called on.
    """

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def get_pixel(self, x: int, y: int) -> Pixel: ...

    def map_pixels(self, fn: PixelMap) -> ImageBuffer: ...

    def rotate(self, radians: float) -> ImageBuffer: ...

    def grayscale_filter(self) -> ImageBuffer: ...


@dataclass(frozen=True, eq=False)
class RGBAImage:
    """Immutable RGBA image backed by a numpy array.

    The constructor normalizes the given array to (H, W, 4) uint8 (see
    ``to_rgba``), takes a private copy and marks it read-only, so neither
    the caller nor any stage can change an existing image.

    Attributes:
        pixels: Read-only (H, W, 4) uint8 array in row-major order.
    """

    pixels: np.ndarray = field(repr=False)

    def __post_init__(self):
        rgba = to_rgba(self.pixels)
        rgba.flags.writeable = False
        object.__setattr__(self, "pixels", rgba)

    @classmethod
    def from_array(cls, img: np.ndarray) -> RGBAImage:
        """Wrap a grayscale, RGB or RGBA array (copied)."""
        return cls(img)

    @classmethod
    def from_pixels(cls, width: int, height: int, pixels: Iterable[Pixel]) -> RGBAImage:
        """Build an image from row-major (r, g, b, a) tuples.

        Raises:
            ValueError: If the pixel count does not match width * height, or
                a channel value is outside [0, 255].
        """
        values = np.asarray(list(pixels), dtype=np.int64)
        if values.shape != (width * height, 4):
            raise ValueError(
                f"Expected {width * height} RGBA pixels for a {width}x{height} image, "
                f"got array of shape {values.shape}"
            )
        if values.min() < 0 or values.max() > 255:
            raise ValueError("Pixel channel values must be within [0, 255]")
        return cls(values.reshape(height, width, 4).astype(np.uint8))

    @classmethod
    def filled(cls, width: int, height: int, rgba: Pixel) -> RGBAImage:
        """A uniform image of the given color."""
        return cls(np.full((height, width, 4), rgba, dtype=np.uint8))

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        """(width, height)"""
        return self.width, self.height

    def get_pixel(self, x: int, y: int) -> Pixel:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(
                f"Pixel ({x}, {y}) outside {self.width}x{self.height} image"
            )
        r, g, b, a = self.pixels[y, x]
        return int(r), int(g), int(b), int(a)

    def map_pixels(self, fn: PixelMap) -> RGBAImage:
        """Apply a vectorized pixel map and wrap the result in a new image.

        Raises:
            ValueError: If ``fn`` changes the array shape.
        """
        mapped = fn(self.pixels)
        if mapped.shape != self.pixels.shape:
            raise ValueError(
                f"Pixel map must preserve shape {self.pixels.shape}, got {mapped.shape}"
            )
        return RGBAImage(mapped)

    def rotate(self, radians: float) -> RGBAImage:
        return RGBAImage(rotate_rgba(self.pixels, radians))

    def grayscale_filter(self) -> RGBAImage:
        return RGBAImage(to_grayscale_rgba(self.pixels))

    def to_array(self) -> np.ndarray:
        """Writable copy of the pixel data."""
        return self.pixels.copy()

    def __eq__(self, other) -> bool:
        if not isinstance(other, RGBAImage):
            return NotImplemented
        return np.array_equal(self.pixels, other.pixels)

    def __repr__(self) -> str:
        return f"RGBAImage({self.width}x{self.height})"
