#!/usr/bin/env python3
"""Tests for rounding modes."""

import pytest

from cent.core.errors import DivisionError, InvalidInputError
from cent.core.rounding import RoundingMode, apply_rounding

# value * 10 -> expected result per mode, for 1.5, 2.5, -1.5, -2.5, 1.1, -1.1, 1.9, -1.9
NUMERATORS = [15, 25, -15, -25, 11, -11, 19, -19]
EXPECTED = {
    RoundingMode.CEIL: [2, 3, -1, -2, 2, -1, 2, -1],
    RoundingMode.FLOOR: [1, 2, -2, -3, 1, -2, 1, -2],
    RoundingMode.EXPAND: [2, 3, -2, -3, 2, -2, 2, -2],
    RoundingMode.TRUNC: [1, 2, -1, -2, 1, -1, 1, -1],
    RoundingMode.HALF_CEIL: [2, 3, -1, -2, 1, -1, 2, -2],
    RoundingMode.HALF_FLOOR: [1, 2, -2, -3, 1, -1, 2, -2],
    RoundingMode.HALF_EXPAND: [2, 3, -2, -3, 1, -1, 2, -2],
    RoundingMode.HALF_TRUNC: [1, 2, -1, -2, 1, -1, 2, -2],
    RoundingMode.HALF_EVEN: [2, 2, -2, -2, 1, -1, 2, -2],
}


class TestApplyRounding:
    """Test apply_rounding across every mode."""

    @pytest.mark.rounding
    @pytest.mark.parametrize("mode", list(EXPECTED), ids=[m.name for m in EXPECTED])
    def test_mode_matrix(self, mode):
        results = [apply_rounding(n, 10, mode) for n in NUMERATORS]
        assert results == EXPECTED[mode]

    @pytest.mark.rounding
    @pytest.mark.parametrize("mode", list(RoundingMode))
    def test_exact_quotients_are_unchanged(self, mode):
        assert apply_rounding(20, 10, mode) == 2
        assert apply_rounding(-20, 10, mode) == -2
        assert apply_rounding(0, 7, mode) == 0

    @pytest.mark.rounding
    def test_half_even_ties(self):
        assert apply_rounding(5, 10, RoundingMode.HALF_EVEN) == 0
        assert apply_rounding(15, 10, RoundingMode.HALF_EVEN) == 2
        assert apply_rounding(35, 10, RoundingMode.HALF_EVEN) == 4

    @pytest.mark.rounding
    def test_negative_denominator(self):
        """Sign comes from both operands."""
        assert apply_rounding(15, -10, RoundingMode.HALF_CEIL) == -1
        assert apply_rounding(-15, -10, RoundingMode.HALF_CEIL) == 2
        assert apply_rounding(-15, 10, RoundingMode.HALF_CEIL) == -1

    @pytest.mark.rounding
    def test_zero_denominator(self):
        with pytest.raises(DivisionError):
            apply_rounding(1, 0, RoundingMode.HALF_EVEN)


class TestRoundingModeNames:
    """Test mode lookup by name."""

    def test_aliases(self):
        assert RoundingMode.HALF_UP is RoundingMode.HALF_EXPAND
        assert RoundingMode.HALF_DOWN is RoundingMode.HALF_TRUNC
        assert RoundingMode.UP is RoundingMode.EXPAND
        assert RoundingMode.DOWN is RoundingMode.TRUNC
        assert RoundingMode.CEILING is RoundingMode.CEIL

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("HALF_EVEN", RoundingMode.HALF_EVEN),
            ("half_even", RoundingMode.HALF_EVEN),
            ("halfEven", RoundingMode.HALF_EVEN),
            ("half-up", RoundingMode.HALF_EXPAND),
            ("floor", RoundingMode.FLOOR),
        ],
    )
    def test_from_name(self, name, expected):
        assert RoundingMode.from_name(name) is expected

    def test_from_name_unknown(self):
        with pytest.raises(InvalidInputError, match="Unknown rounding mode"):
            RoundingMode.from_name("sideways")
