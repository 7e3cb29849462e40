#!/usr/bin/env python3
"""
Validated String Types

Nominal string subtypes for text that has already passed validation. A
DecimalString or RationalString can only be obtained through its ``parse``
factory, so holding one is proof that the text is well-formed.
"""

import re

from .errors import ErrorCode, ParseError

DECIMAL_PATTERN = re.compile(r"^-?\d+(\.\d+)?$")
RATIONAL_PATTERN = re.compile(r"^\s*(-?\d+)\s*/\s*(\d+)\s*$")


class DecimalString(str):
    """
    A plain decimal literal such as "123", "-0.50" or "100.00".

    No exponent, no grouping separators, no leading "+" and digits on both
    sides of the decimal point.
    """

    __slots__ = ()

    @classmethod
    def parse(cls, text: str) -> "DecimalString":
        """
        Validate text and wrap it.

        Raises:
            ParseError: If text is not a plain decimal literal
        """
        if not isinstance(text, str) or not DECIMAL_PATTERN.match(text):
            raise ParseError(
                f"Invalid number format: {text!r}",
                input=text if isinstance(text, str) else None,
                code=ErrorCode.INVALID_NUMBER_FORMAT,
                suggestion="Use a plain decimal such as '123.45' or '-0.5'.",
            )
        return cls(text)

    @property
    def scale(self) -> int:
        """Number of digits after the decimal point."""
        _, _, fraction = self.partition(".")
        return len(fraction)


class RationalString(str):
    """A fraction literal such as "1/3" or " -2 / 7 "."""

    __slots__ = ()

    @classmethod
    def parse(cls, text: str) -> "RationalString":
        """
        Validate text and wrap it.

        Raises:
            ParseError: If text is not "p/q" or q is zero
        """
        match = RATIONAL_PATTERN.match(text) if isinstance(text, str) else None
        if not match:
            raise ParseError(
                f"Invalid fraction format: {text!r}",
                input=text if isinstance(text, str) else None,
                code=ErrorCode.INVALID_NUMBER_FORMAT,
                suggestion="Use a fraction such as '1/3'.",
            )
        if int(match.group(2)) == 0:
            raise ParseError(
                f"Fraction denominator cannot be zero: {text!r}",
                input=text,
                code=ErrorCode.DIVISION_BY_ZERO,
            )
        return cls(text)

    def parts(self) -> tuple[int, int]:
        """Return (numerator, denominator) as integers."""
        match = RATIONAL_PATTERN.match(self)
        assert match is not None
        return int(match.group(1)), int(match.group(2))


def is_decimal_string(text: object) -> bool:
    """Check whether text is a valid decimal literal."""
    return isinstance(text, str) and DECIMAL_PATTERN.match(text) is not None


def is_rational_string(text: object) -> bool:
    """Check whether text is a valid fraction literal with non-zero denominator."""
    if not isinstance(text, str):
        return False
    match = RATIONAL_PATTERN.match(text)
    return match is not None and int(match.group(2)) != 0
