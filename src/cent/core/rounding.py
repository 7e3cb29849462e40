#!/usr/bin/env python3
"""
Rounding Modes

The single rounding primitive used wherever an exact ratio has to collapse to
an integer: lossy Rational conversion, Money division and Money rounding.

Modes follow the names used by ECMA-402 / Temporal:

    CEIL         toward +infinity
    FLOOR        toward -infinity
    EXPAND       away from zero
    TRUNC        toward zero
    HALF_CEIL    nearest, ties toward +infinity
    HALF_FLOOR   nearest, ties toward -infinity
    HALF_EXPAND  nearest, ties away from zero (school rounding)
    HALF_TRUNC   nearest, ties toward zero
    HALF_EVEN    nearest, ties to the even neighbour (banker's rounding)
"""

from enum import Enum

from .errors import DivisionError, ErrorCode, InvalidInputError


class RoundingMode(Enum):
    """Closed set of rounding modes."""

    CEIL = "ceil"
    FLOOR = "floor"
    EXPAND = "expand"
    TRUNC = "trunc"
    HALF_CEIL = "halfCeil"
    HALF_FLOOR = "halfFloor"
    HALF_EXPAND = "halfExpand"
    HALF_TRUNC = "halfTrunc"
    HALF_EVEN = "halfEven"

    # Familiar aliases
    UP = "expand"
    DOWN = "trunc"
    CEILING = "ceil"
    HALF_UP = "halfExpand"
    HALF_DOWN = "halfTrunc"

    @classmethod
    def from_name(cls, name: str) -> "RoundingMode":
        """
        Look up a rounding mode by member name or value, case-insensitively.

        Args:
            name: "HALF_EVEN", "half_even", "halfEven", "half-up", ...

        Returns:
            Matching RoundingMode

        Raises:
            InvalidInputError: If no mode matches
        """
        key = name.strip().replace("-", "_")
        for member_name, member in cls.__members__.items():
            if member_name.lower() == key.lower() or member.value.lower() == key.lower():
                return member
        valid = ", ".join(m.name for m in cls)
        raise InvalidInputError(
            f"Unknown rounding mode: {name!r}",
            suggestion=f"Use one of: {valid}",
        )


def apply_rounding(numerator: int, denominator: int, mode: RoundingMode) -> int:
    """
    Divide numerator by denominator and round the quotient to an integer.

    The quotient is computed by integer division truncated toward zero; the
    remainder then decides the direction. Sign is determined by
    ``(numerator < 0) != (denominator < 0)`` so every mode behaves correctly
    on negative inputs.

    Args:
        numerator: Dividend
        denominator: Divisor (non-zero)
        mode: RoundingMode to apply

    Returns:
        Rounded integer quotient

    Raises:
        DivisionError: If denominator is zero

    Examples:
        apply_rounding(5, 10, RoundingMode.HALF_EVEN) -> 0
        apply_rounding(15, 10, RoundingMode.HALF_EVEN) -> 2
        apply_rounding(-15, 10, RoundingMode.HALF_CEIL) -> -1
    """
    if denominator == 0:
        raise DivisionError("Cannot divide by zero", divisor=denominator, code=ErrorCode.DIVISION_BY_ZERO)

    abs_num = abs(numerator)
    abs_den = abs(denominator)
    negative = (numerator < 0) != (denominator < 0)

    quotient = abs_num // abs_den
    remainder = abs_num % abs_den
    if negative:
        quotient = -quotient

    if remainder == 0:
        return quotient

    # Neighbour one unit further from zero
    away = quotient - 1 if negative else quotient + 1

    if mode == RoundingMode.CEIL:
        return quotient if negative else away
    if mode == RoundingMode.FLOOR:
        return away if negative else quotient
    if mode == RoundingMode.EXPAND:
        return away
    if mode == RoundingMode.TRUNC:
        return quotient

    double = 2 * remainder
    if double > abs_den:
        return away
    if double < abs_den:
        return quotient

    # Exact tie
    if mode == RoundingMode.HALF_CEIL:
        return quotient if negative else away
    if mode == RoundingMode.HALF_FLOOR:
        return away if negative else quotient
    if mode == RoundingMode.HALF_EXPAND:
        return away
    if mode == RoundingMode.HALF_TRUNC:
        return quotient
    if mode == RoundingMode.HALF_EVEN:
        return quotient if quotient % 2 == 0 else away

    raise InvalidInputError(f"Unsupported rounding mode: {mode!r}")
