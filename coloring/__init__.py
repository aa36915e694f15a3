"""
RGB color model used for fill colors and generic color arithmetic.

Key components:
- ColorValue: immutable RGB triple with clamped channel arithmetic,
  hex parsing/formatting and linear blending
- Channel: names one of the three RGB components
"""

from .color import CHANNEL_MAX, CHANNEL_MIN, Channel, ColorValue, clamp_channel

__all__ = [
    "CHANNEL_MAX",
    "CHANNEL_MIN",
    "Channel",
    "ColorValue",
    "clamp_channel",
]
