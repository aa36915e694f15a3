"""
RGB color values with saturating channel arithmetic.

Every constructor and transformation clamps channels into [0, 255], so a
ColorValue never holds an out-of-range channel. Instances are immutable;
operations return new values.
"""

from __future__ import annotations

import operator
import random as _random
import string
from dataclasses import dataclass, replace
from enum import Enum

from errors import ValidationError

CHANNEL_MIN = 0
CHANNEL_MAX = 255

_HEX_DIGITS = frozenset(string.hexdigits)


class Channel(Enum):
    """One component of the RGB color model."""

    RED = "red"
    GREEN = "green"
    BLUE = "blue"


def clamp_channel(value: int) -> int:
    """Saturate an integer channel value into [0, 255]."""
    if value < CHANNEL_MIN:
        return CHANNEL_MIN
    if value > CHANNEL_MAX:
        return CHANNEL_MAX
    return value


@dataclass(frozen=True)
class ColorValue:
    """An RGB color whose channels are always within [0, 255].

    Out-of-range arguments are clamped at construction rather than rejected,
    so ``ColorValue(300, -5, 10) == ColorValue(255, 0, 10)``.
    Channels must be integers; floats and strings raise TypeError.

    Attributes:
        red: Red channel intensity.
        green: Green channel intensity.
        blue: Blue channel intensity.
    """

    red: int
    green: int
    blue: int

    def __post_init__(self):
        for channel in Channel:
            value = getattr(self, channel.value)
            object.__setattr__(self, channel.value, clamp_channel(operator.index(value)))

    def increase_channel(self, channel: Channel, amount: int) -> ColorValue:
        """Return a copy with one channel shifted by ``amount`` (may be negative).

        The other two channels pass through unchanged.
        """
        current = getattr(self, channel.value)
        return replace(self, **{channel.value: clamp_channel(current + amount)})

    def increase_all(self, delta_r: int, delta_g: int, delta_b: int) -> ColorValue:
        """Shift all three channels by independent amounts, each clamped."""
        return ColorValue(
            clamp_channel(self.red + delta_r),
            clamp_channel(self.green + delta_g),
            clamp_channel(self.blue + delta_b),
        )

    def mix_with(self, other: ColorValue, ratio: float) -> ColorValue:
        """Linearly blend towards ``other``.

        A ratio of 0.0 returns this color and 1.0 returns ``other``. Each
        channel is ``round(a + (b - a) * ratio)`` using round-half-to-even,
        then clamped.

        Raises:
            ValidationError: If ratio is outside [0.0, 1.0]. This is a caller
                defect and is never coerced into range.
        """
        if not 0.0 <= ratio <= 1.0:
            raise ValidationError(f"ratio must be between 0.0 and 1.0, got {ratio}")

        def lerp(a: int, b: int) -> int:
            return clamp_channel(round(a + (b - a) * ratio))

        return ColorValue(
            lerp(self.red, other.red),
            lerp(self.green, other.green),
            lerp(self.blue, other.blue),
        )

    def to_hex(self) -> str:
        """Lowercase web notation, e.g. ``"#ff00cc"``."""
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"

    def as_tuple(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    def as_rgba(self, alpha: int = CHANNEL_MAX) -> tuple[int, int, int, int]:
        return (self.red, self.green, self.blue, clamp_channel(alpha))

    @classmethod
    def from_hex(cls, text: str) -> ColorValue | None:
        """Parse a hex color string.

        Accepts an optional leading ``#``, any letter case, and surrounding
        whitespace. The body must be 3 digits (each digit doubled), 6 digits
        (RGB byte pairs) or 8 digits, in which case the first byte is dropped
        and the remaining six are read as RGB.

        Returns:
            The parsed color, or None for any other length or a non-hex
            character. Never raises on malformed input.
        """
        body = text.strip()
        if body.startswith("#"):
            body = body[1:].strip()
        body = body.lower()
        if not body or not set(body) <= _HEX_DIGITS:
            return None

        if len(body) == 3:
            pairs = [digit * 2 for digit in body]
        elif len(body) == 6:
            pairs = [body[0:2], body[2:4], body[4:6]]
        elif len(body) == 8:
            pairs = [body[2:4], body[4:6], body[6:8]]
        else:
            return None

        red, green, blue = (int(pair, 16) for pair in pairs)
        return cls(red, green, blue)

    @classmethod
    def from_color(cls, red: int, green: int, blue: int) -> ColorValue:
        """Build a color from arbitrary integers, clamping each channel."""
        return cls(red, green, blue)

    @classmethod
    def random(cls, rng: _random.Random | None = None) -> ColorValue:
        """Sample each channel uniformly and independently from [0, 255].

        Args:
            rng: Optional random source for reproducible output.
        """
        rng = rng or _random
        return cls(
            rng.randint(CHANNEL_MIN, CHANNEL_MAX),
            rng.randint(CHANNEL_MIN, CHANNEL_MAX),
            rng.randint(CHANNEL_MIN, CHANNEL_MAX),
        )
