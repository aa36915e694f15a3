"""
Contrast level classification.

A contrast factor is classified into exactly one of three levels:
Normal (factor == 1.0), High (factor > 1.0) or Low (factor < 1.0). High and
Low validate their factor on construction, so an invalid level can never
exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Union

from errors import ValidationError

NORMAL_FACTOR = 1.0


def _check_finite(factor: float, level: str) -> None:
    if not math.isfinite(factor):
        raise ValidationError(f"{level} contrast factor must be finite, got {factor}")


@dataclass(frozen=True)
class Normal:
    """Unchanged contrast (factor fixed at 1.0)."""

    factor: float = field(default=NORMAL_FACTOR, init=False)


@dataclass(frozen=True)
class High:
    """Increased contrast.

    Raises:
        ValidationError: If factor is not strictly greater than 1.0.
    """

    factor: float

    def __post_init__(self):
        _check_finite(self.factor, "High")
        if not self.factor > NORMAL_FACTOR:
            raise ValidationError(f"High contrast factor must be > 1.0, got {self.factor}")
        object.__setattr__(self, "factor", float(self.factor))


@dataclass(frozen=True)
class Low:
    """Reduced contrast.

    Raises:
        ValidationError: If factor is not strictly less than 1.0.
    """

    factor: float

    def __post_init__(self):
        _check_finite(self.factor, "Low")
        if not self.factor < NORMAL_FACTOR:
            raise ValidationError(f"Low contrast factor must be < 1.0, got {self.factor}")
        object.__setattr__(self, "factor", float(self.factor))


ContrastLevel = Union[Normal, High, Low]

NORMAL = Normal()


def contrast_level_from_factor(factor: float) -> ContrastLevel:
    """Classify a contrast multiplier.

    Exactly one branch applies: 1.0 gives NORMAL, above gives High, below
    gives Low.

    Raises:
        ValidationError: If factor is NaN or infinite.
    """
    if factor == NORMAL_FACTOR:
        return NORMAL
    if factor > NORMAL_FACTOR:
        return High(factor)
    if factor < NORMAL_FACTOR:
        return Low(factor)
    raise ValidationError(f"Contrast factor must be a real number, got {factor}")
