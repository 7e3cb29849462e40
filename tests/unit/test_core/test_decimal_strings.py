#!/usr/bin/env python3
"""Tests for validated string types."""

import pytest

from cent.core.decimal_strings import DecimalString, RationalString, is_decimal_string, is_rational_string
from cent.core.errors import ParseError


class TestDecimalString:
    """Test DecimalString validation."""

    @pytest.mark.parametrize("text", ["0", "-1", "123.45", "100.00", "-0.001"])
    def test_valid(self, text):
        assert is_decimal_string(text)
        assert DecimalString.parse(text) == text

    @pytest.mark.parametrize("text", ["", "1.", ".5", "1e3", "1,000", "+1", " 1", None])
    def test_invalid(self, text):
        assert not is_decimal_string(text)
        with pytest.raises(ParseError):
            DecimalString.parse(text)

    def test_scale(self):
        assert DecimalString.parse("100.50").scale == 2
        assert DecimalString.parse("7").scale == 0


class TestRationalString:
    """Test RationalString validation."""

    def test_parts(self):
        assert RationalString.parse("1/3").parts() == (1, 3)
        assert RationalString.parse(" -2 / 7 ").parts() == (-2, 7)

    @pytest.mark.parametrize("text", ["1/0", "1/-3", "1.5/2", "1", "/3"])
    def test_invalid(self, text):
        assert not is_rational_string(text)
        with pytest.raises(ParseError):
            RationalString.parse(text)
