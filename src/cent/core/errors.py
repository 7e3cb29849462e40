#!/usr/bin/env python3
"""
Error Taxonomy

Structured exceptions raised by the numeric kernel, the money type and the
string parser. Every error carries a machine-readable code plus optional
guidance (suggestion, example) so callers can reconstruct what went wrong.

All failures are local and synchronous: nothing here is retryable, there is
no transient-failure class because the kernel never performs I/O.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Machine-readable error codes."""

    # Parsing
    PARSE_ERROR = "PARSE_ERROR"
    INVALID_NUMBER_FORMAT = "INVALID_NUMBER_FORMAT"
    INVALID_MONEY_STRING = "INVALID_MONEY_STRING"
    UNKNOWN_CURRENCY = "UNKNOWN_CURRENCY"

    # Currency
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"

    # Arithmetic
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    DIVISION_REQUIRES_ROUNDING = "DIVISION_REQUIRES_ROUNDING"
    INVALID_DIVISOR = "INVALID_DIVISOR"
    PRECISION_LOSS = "PRECISION_LOSS"
    INVALID_PRECISION = "INVALID_PRECISION"

    # Input validation
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_RANGE = "INVALID_RANGE"
    INVALID_RATIO = "INVALID_RATIO"
    INVALID_JSON = "INVALID_JSON"
    EMPTY_ARRAY = "EMPTY_ARRAY"

    # Exchange rates
    INVALID_EXCHANGE_RATE = "INVALID_EXCHANGE_RATE"
    EXCHANGE_RATE_MISMATCH = "EXCHANGE_RATE_MISMATCH"


class CentError(Exception):
    """
    Base class for every error raised by the cent package.

    Attributes:
        code: ErrorCode identifying the failure
        suggestion: Optional hint describing how to fix the input
        example: Optional snippet showing correct usage
        cause: Optional underlying exception
    """

    default_code = ErrorCode.INVALID_INPUT

    def __init__(
        self,
        message: str,
        code: ErrorCode | None = None,
        suggestion: str | None = None,
        example: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.suggestion = suggestion
        self.example = example
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def to_detailed_string(self) -> str:
        """Render the message together with code, suggestion and example."""
        lines = [f"{type(self).__name__} [{self.code.value}]: {self.message}"]
        if self.suggestion:
            lines.append(f"  Suggestion: {self.suggestion}")
        if self.example:
            lines.append(f"  Example: {self.example}")
        if self.cause is not None:
            lines.append(f"  Caused by: {self.cause}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for JSON output."""
        return {
            "error": type(self).__name__,
            "code": self.code.value,
            "message": self.message,
            "suggestion": self.suggestion,
            "example": self.example,
        }


class ParseError(CentError):
    """Unparseable or ambiguous numeric or monetary text."""

    default_code = ErrorCode.PARSE_ERROR

    def __init__(self, message: str, input: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.input = input


class CurrencyMismatchError(CentError):
    """Operation attempted between amounts of different currencies."""

    default_code = ErrorCode.CURRENCY_MISMATCH

    def __init__(self, expected: str, actual: str, operation: str, **kwargs: Any):
        super().__init__(
            f"Cannot {operation} Money with different currencies: expected {expected}, got {actual}",
            **kwargs,
        )
        self.expected = expected
        self.actual = actual
        self.operation = operation


class DivisionError(CentError):
    """Zero divisor, or a divisor that cannot be divided exactly in base 10."""

    default_code = ErrorCode.DIVISION_BY_ZERO

    def __init__(self, message: str, divisor: Any = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.divisor = divisor


class PrecisionLossError(CentError):
    """An operation would discard significant digits without lossy opt-in."""

    default_code = ErrorCode.PRECISION_LOSS


class InvalidInputError(CentError):
    """Malformed arguments: ratios, precision budgets, empty arrays, JSON."""

    default_code = ErrorCode.INVALID_INPUT


class ExchangeRateError(CentError):
    """Invalid exchange rate or a rate that does not apply to the amount."""

    default_code = ErrorCode.INVALID_EXCHANGE_RATE
