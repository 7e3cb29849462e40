#!/usr/bin/env python3
"""Tests for integer math helpers."""

import pytest

from cent.core.math_utils import abs_int, bit_length, gcd, pow10, strip_twos_and_fives, trunc_div


class TestMathUtils:
    """Test the integer helpers behind the numeric kernel."""

    @pytest.mark.parametrize(
        "value,residual,shift",
        [(4, 1, 2), (8, 1, 3), (25, 1, 2), (10, 1, 1), (12, 3, 2), (-40, 1, 3), (7, 7, 0)],
    )
    def test_strip_twos_and_fives(self, value, residual, shift):
        assert strip_twos_and_fives(value) == (residual, shift)

    @pytest.mark.parametrize(
        "numerator,denominator,expected",
        [(7, 2, 3), (-7, 2, -3), (7, -2, -3), (-7, -2, 3)],
    )
    def test_trunc_div_rounds_toward_zero(self, numerator, denominator, expected):
        assert trunc_div(numerator, denominator) == expected

    def test_small_helpers(self):
        assert gcd(-12, 18) == 6
        assert abs_int(-5) == 5
        assert pow10(3) == 1000
        assert bit_length(-255) == 8
        assert bit_length(0) == 0

    def test_pow10_rejects_negative_exponent(self):
        with pytest.raises(ValueError):
            pow10(-1)
