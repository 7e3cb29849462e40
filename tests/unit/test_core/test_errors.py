#!/usr/bin/env python3
"""Tests for the error taxonomy."""

import pytest

from cent.core.errors import (
    CentError,
    CurrencyMismatchError,
    DivisionError,
    ErrorCode,
    ExchangeRateError,
    InvalidInputError,
    ParseError,
    PrecisionLossError,
)


class TestErrorHierarchy:
    """Every error shares one base and carries a default code."""

    @pytest.mark.parametrize(
        "error_class,code",
        [
            (ParseError, ErrorCode.PARSE_ERROR),
            (DivisionError, ErrorCode.DIVISION_BY_ZERO),
            (PrecisionLossError, ErrorCode.PRECISION_LOSS),
            (InvalidInputError, ErrorCode.INVALID_INPUT),
            (ExchangeRateError, ErrorCode.INVALID_EXCHANGE_RATE),
        ],
    )
    def test_default_codes(self, error_class, code):
        error = error_class("boom")
        assert isinstance(error, CentError)
        assert error.code == code
        assert str(error) == "boom"

    def test_explicit_code_overrides_default(self):
        error = DivisionError("no", divisor=3, code=ErrorCode.DIVISION_REQUIRES_ROUNDING)
        assert error.code == ErrorCode.DIVISION_REQUIRES_ROUNDING
        assert error.divisor == 3

    def test_currency_mismatch_message(self):
        error = CurrencyMismatchError(expected="USD", actual="EUR", operation="add")
        assert error.code == ErrorCode.CURRENCY_MISMATCH
        assert str(error) == "Cannot add Money with different currencies: expected USD, got EUR"
        assert (error.expected, error.actual, error.operation) == ("USD", "EUR", "add")

    def test_parse_error_keeps_input(self):
        assert ParseError("bad", input="$$").input == "$$"


class TestErrorRendering:
    """Test detailed string and dict forms."""

    def test_to_detailed_string(self):
        cause = ValueError("inner")
        error = InvalidInputError("Bad ratio", suggestion="Use integers", example="allocate([1, 2])", cause=cause)
        text = error.to_detailed_string()
        assert text.splitlines() == [
            "InvalidInputError [INVALID_INPUT]: Bad ratio",
            "  Suggestion: Use integers",
            "  Example: allocate([1, 2])",
            "  Caused by: inner",
        ]
        assert error.__cause__ is cause

    def test_to_dict(self):
        error = PrecisionLossError("lossy", suggestion="round")
        assert error.to_dict() == {
            "error": "PrecisionLossError",
            "code": "PRECISION_LOSS",
            "message": "lossy",
            "suggestion": "round",
            "example": None,
        }
