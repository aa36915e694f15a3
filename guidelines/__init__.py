"""Website image dimension guidelines."""

from .registry import (
    ALL_IMAGE_TYPES,
    AspectRatio,
    Dimension,
    WebsiteImageType,
    from_name,
    summary_lines,
)

__all__ = [
    "ALL_IMAGE_TYPES",
    "AspectRatio",
    "Dimension",
    "WebsiteImageType",
    "from_name",
    "summary_lines",
]
