"""
Unit tests for contrast level classification.
"""

import pytest

from errors import ValidationError
from preprocessing import NORMAL, High, Low, Normal, contrast_level_from_factor


class TestFromFactor:

    def test_one_is_normal(self):
        assert contrast_level_from_factor(1.0) is NORMAL

    def test_above_one_is_high(self):
        assert contrast_level_from_factor(2.0) == High(2.0)

    def test_below_one_is_low(self):
        assert contrast_level_from_factor(0.5) == Low(0.5)

    def test_integer_factor_accepted(self):
        level = contrast_level_from_factor(2)
        assert level == High(2.0)
        assert isinstance(level.factor, float)

    def test_just_above_and_below_one(self):
        assert isinstance(contrast_level_from_factor(1.0000001), High)
        assert isinstance(contrast_level_from_factor(0.9999999), Low)

    def test_zero_and_negative_are_low(self):
        assert contrast_level_from_factor(0.0) == Low(0.0)
        assert contrast_level_from_factor(-1.0) == Low(-1.0)

    def test_nan_raises(self):
        with pytest.raises(ValidationError, match="real number"):
            contrast_level_from_factor(float("nan"))

    def test_infinity_raises(self):
        with pytest.raises(ValidationError, match="finite"):
            contrast_level_from_factor(float("inf"))


class TestLevels:

    def test_normal_factor_is_fixed(self):
        assert Normal().factor == 1.0
        assert Normal() == NORMAL

    def test_normal_factor_cannot_be_set(self):
        with pytest.raises(TypeError):
            Normal(factor=2.0)

    @pytest.mark.parametrize("factor", [0.5, 1.0])
    def test_high_rejects_factor_not_above_one(self, factor):
        with pytest.raises(ValidationError, match="must be > 1.0"):
            High(factor)

    @pytest.mark.parametrize("factor", [2.0, 1.0])
    def test_low_rejects_factor_not_below_one(self, factor):
        with pytest.raises(ValidationError, match="must be < 1.0"):
            Low(factor)

    def test_levels_are_distinct_types(self):
        assert High(1.5) != Low(0.5)
        assert High(1.5) != NORMAL

    def test_levels_are_hashable_values(self):
        assert len({High(1.5), High(1.5), Low(0.5), NORMAL}) == 3
