#!/usr/bin/env python3
"""Tests for the Rational exact-fraction type."""

import pytest

from cent.core.errors import DivisionError, ErrorCode, InvalidInputError, ParseError, PrecisionLossError
from cent.core.fixed_point import ScaledDecimal
from cent.core.rational import Rational
from cent.core.rounding import RoundingMode


class TestRationalArithmetic:
    """Test Rational arithmetic."""

    def test_add_simplifies(self):
        result = Rational(1, 3).add(Rational(1, 6))
        assert (result.p, result.q) == (1, 2)

    def test_subtract_simplifies(self):
        result = Rational(1, 2).subtract(Rational(1, 6))
        assert (result.p, result.q) == (1, 3)

    def test_multiply_does_not_simplify(self):
        result = Rational(1, 2).multiply(Rational(2, 3))
        assert (result.p, result.q) == (2, 6)
        assert result == Rational(1, 3)

    def test_divide(self):
        result = Rational(1, 2).divide(Rational(1, 4))
        assert result == Rational(2)

    def test_divide_by_zero(self):
        with pytest.raises(DivisionError):
            Rational(1, 2).divide(Rational(0, 5))

    def test_zero_denominator_rejected(self):
        with pytest.raises(DivisionError):
            Rational(1, 0)

    def test_mixed_operands(self):
        """ScaledDecimal, int and string operands are promoted."""
        assert Rational(1, 4).add(ScaledDecimal(75, 2)) == Rational(1)
        assert Rational(1, 3).multiply(3) == Rational(1)
        assert Rational(1, 3).add("1/3") == Rational(2, 3)

    def test_simplify_normalizes_sign(self):
        result = Rational(2, -4).simplify()
        assert (result.p, result.q) == (-1, 2)
        assert Rational(0, -7).simplify().q == 1

    def test_invert(self):
        assert Rational(2, 3).invert() == Rational(3, 2)
        with pytest.raises(DivisionError):
            Rational(0).invert()


class TestRationalComparison:
    """Test Rational ordering with signs on either side."""

    def test_negative_denominator(self):
        assert Rational(1, -2) < Rational(0)
        assert Rational(1, -2) == Rational(-1, 2)
        assert Rational(-1, -2) == Rational(1, 2)

    def test_sign_helpers(self):
        assert Rational(1, -2).is_negative()
        assert Rational(-1, -2).is_positive()
        assert Rational(0, -3).is_zero()
        assert not Rational(0, -3).is_negative()

    def test_hash_matches_equal_values(self):
        assert hash(Rational(2, 4)) == hash(Rational(1, 2))
        assert len({Rational(2, 4), Rational(1, 2), Rational(-1, -2)}) == 1


class TestRationalToFixedPoint:
    """Test exact and budgeted conversion to ScaledDecimal."""

    @pytest.mark.parametrize(
        "p,q,amount,scale",
        [(1, 4, 25, 2), (3, 1, 3, 0), (50, 200, 25, 2), (3, 8, 375, 3), (-1, 2, -5, 1)],
        ids=["quarter", "integer", "unreduced_quarter", "three_eighths", "negative_half"],
    )
    def test_exact_conversion(self, p, q, amount, scale):
        result = Rational(p, q).to_fixed_point()
        assert (result.amount, result.scale) == (amount, scale)

    @pytest.mark.parametrize("p,q", [(1, 3), (2, 6), (1, 7)])
    def test_exact_conversion_requires_terminating_value(self, p, q):
        with pytest.raises(PrecisionLossError, match="not a power of 10"):
            Rational(p, q).to_fixed_point()

    def test_max_precision(self):
        result = Rational(1, 3).to_fixed_point(max_precision=5)
        assert (result.amount, result.scale) == (33333, 5)

    def test_max_precision_rounds(self):
        result = Rational(2, 3).to_fixed_point(max_precision=3)
        assert (result.amount, result.scale) == (667, 3)

    def test_max_precision_keeps_integer_digits(self):
        """Integer digits are never dropped even when they exceed the budget."""
        result = Rational(1000, 3).to_fixed_point(max_precision=2)
        assert (result.amount, result.scale) == (333, 0)

    def test_max_precision_rounding_mode(self):
        result = Rational(2, 3).to_fixed_point(max_precision=3, rounding_mode=RoundingMode.TRUNC)
        assert (result.amount, result.scale) == (666, 3)

    def test_max_bits(self):
        """Keeps the most precise candidate whose amount and scale fit the budget."""
        result = Rational(1, 3).to_fixed_point(max_bits=16)
        assert (result.amount, result.scale) == (3333, 4)

    def test_both_budgets_rejected(self):
        with pytest.raises(InvalidInputError):
            Rational(1, 3).to_fixed_point(max_precision=5, max_bits=64)

    def test_non_positive_budget_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            Rational(1, 3).to_fixed_point(max_precision=0)
        assert exc_info.value.code == ErrorCode.INVALID_PRECISION

    def test_round_to_scale(self):
        result = Rational(2, 3).round_to_scale(2, RoundingMode.HALF_EVEN)
        assert (result.amount, result.scale) == (67, 2)


class TestRationalSerialization:
    """Test parsing and string forms."""

    @pytest.mark.parametrize(
        "p,q,precision,text",
        [(1, 4, 50, "0.25"), (1, 3, 5, "0.33333"), (-6, 3, 50, "-2"), (-1, 3, 3, "-0.333"), (0, 5, 50, "0")],
    )
    def test_to_decimal_string(self, p, q, precision, text):
        assert Rational(p, q).to_decimal_string(precision) == text

    def test_str_is_simplified_fraction(self):
        assert str(Rational(2, 4)) == "1/2"

    def test_json_has_positive_denominator(self):
        assert Rational(1, -3).to_json() == {"p": "-1", "q": "3"}
        assert Rational.from_json({"p": "1", "q": "3"}) == Rational(1, 3)

    def test_from_json_rejects_other_shapes(self):
        with pytest.raises(InvalidInputError):
            Rational.from_json("1/3")
        with pytest.raises(InvalidInputError):
            Rational.from_json({"p": "x", "q": "3"})

    def test_from_fraction_string(self):
        result = Rational.from_fraction_string(" -2 / 7 ")
        assert (result.p, result.q) == (-2, 7)

    def test_from_fraction_string_rejects_zero_denominator(self):
        with pytest.raises(ParseError):
            Rational.from_fraction_string("1/0")

    def test_parse_decimal(self):
        result = Rational.parse("1.25")
        assert (result.p, result.q) == (125, 100)
