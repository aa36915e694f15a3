"""
Configuration for the OCR preprocessing pipeline.

All preprocessing steps are parameterized through OCRConfig so a run can be
reproduced exactly from its configuration.
"""

import math
import numbers
from dataclasses import dataclass

from config import (
    OCR_BINARIZE,
    OCR_BINARIZE_THRESHOLD,
    OCR_CONTRAST_FACTOR,
    OCR_TILT_DEGREES,
)
from errors import ValidationError

from .contrast import ContrastLevel, contrast_level_from_factor


@dataclass(frozen=True)
class OCRConfig:
    """Configuration for the rotate, grayscale, contrast, binarize pipeline.

    Attributes:
        tilt_degrees: Rotation applied first, in degrees (positive =
                      counterclockwise). Converted to radians for the
                      rotate step. 0.0 skips rotation.
        contrast_factor: Contrast multiplier; 1.0 = unchanged, >1.0 =
                         higher contrast, <1.0 = lower contrast.
        threshold: Binarization brightness cutoff (0-255).
        binarize: Whether to finish with binarization.
    """

    tilt_degrees: float = OCR_TILT_DEGREES
    contrast_factor: float = OCR_CONTRAST_FACTOR
    threshold: int = OCR_BINARIZE_THRESHOLD
    binarize: bool = OCR_BINARIZE

    def validate(self) -> None:
        """Validate configuration parameters.

        Raises:
            ValidationError: If any parameter is invalid.
        """
        if not math.isfinite(self.tilt_degrees):
            raise ValidationError(f"tilt_degrees must be finite, got {self.tilt_degrees}")

        # Raises for NaN and infinite factors
        contrast_level_from_factor(self.contrast_factor)

        if isinstance(self.threshold, bool) or not isinstance(self.threshold, numbers.Integral):
            raise ValidationError(
                f"threshold must be int, got {type(self.threshold).__name__}"
            )
        if not 0 <= self.threshold <= 255:
            raise ValidationError(
                f"threshold must be within [0, 255], got {self.threshold}"
            )

    @property
    def radians(self) -> float:
        """Tilt converted to radians for the rotate step."""
        return math.radians(self.tilt_degrees)

    @property
    def contrast_level(self) -> ContrastLevel:
        return contrast_level_from_factor(self.contrast_factor)
