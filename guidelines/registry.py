"""
Recommended website image dimensions.

A static registry of image roles (hero, banner, favicon, ...) with desktop
and mobile dimensions. The aspect ratio of each role is derived from its
desktop dimension.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Dimension:
    width: int
    height: int

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


@dataclass(frozen=True)
class AspectRatio:
    """Aspect ratio of a dimension, rendered in lowest terms (e.g. "16:9")."""

    dimension: Dimension

    @property
    def value(self) -> float:
        return self.dimension.width / self.dimension.height

    def __str__(self) -> str:
        divisor = math.gcd(self.dimension.width, self.dimension.height)
        return f"{self.dimension.width // divisor}:{self.dimension.height // divisor}"


@dataclass(frozen=True)
class WebsiteImageType:
    """An image role with its recommended desktop and mobile sizes."""

    name: str
    desktop: Dimension
    mobile: Dimension

    @property
    def ratio(self) -> AspectRatio:
        return AspectRatio(self.desktop)


ALL_IMAGE_TYPES: tuple[WebsiteImageType, ...] = (
    WebsiteImageType("background", Dimension(2560, 1400), Dimension(360, 640)),
    WebsiteImageType("hero", Dimension(1280, 720), Dimension(360, 200)),
    WebsiteImageType("banner", Dimension(1200, 400), Dimension(360, 120)),
    WebsiteImageType("blog", Dimension(1200, 800), Dimension(360, 240)),
    WebsiteImageType("logo_rectangle", Dimension(400, 100), Dimension(160, 40)),
    WebsiteImageType("logo_square", Dimension(100, 100), Dimension(60, 60)),
    WebsiteImageType("favicon", Dimension(16, 16), Dimension(16, 16)),
    WebsiteImageType("social_icon", Dimension(32, 32), Dimension(48, 48)),
    WebsiteImageType("lightbox", Dimension(1920, 1080), Dimension(360, 640)),
    WebsiteImageType("thumbnail", Dimension(300, 300), Dimension(90, 90)),
    WebsiteImageType("product_thumbnail", Dimension(300, 300), Dimension(150, 150)),
)


def from_name(name: str) -> WebsiteImageType | None:
    """Look up an image type by name (case-insensitive)."""
    wanted = name.strip().lower()
    for image_type in ALL_IMAGE_TYPES:
        if image_type.name == wanted:
            return image_type
    return None


def summary_lines() -> list[str]:
    """Fixed-width table of every image type, header first."""
    lines = [
        f"{'Type':<20} {'Desktop (WxH)':<20} {'Mobile (WxH)':<20} Ratio",
        "-" * 70,
    ]
    for image_type in ALL_IMAGE_TYPES:
        lines.append(
            f"{image_type.name:<20} {str(image_type.desktop):<20} "
            f"{str(image_type.mobile):<20} {image_type.ratio}"
        )
    return lines
