#!/usr/bin/env python3
"""
Integer Math Helpers

Small arbitrary-precision integer utilities shared by the fixed-point and
rational types. Nothing here touches floating point.
"""

import math


def gcd(a: int, b: int) -> int:
    """Greatest common divisor, always non-negative."""
    return math.gcd(a, b)


def abs_int(value: int) -> int:
    """Absolute value of an integer."""
    return -value if value < 0 else value


def pow10(exponent: int) -> int:
    """Return 10**exponent for a non-negative exponent."""
    if exponent < 0:
        raise ValueError(f"Exponent must be non-negative, got {exponent}")
    return 10**exponent


def strip_twos_and_fives(value: int) -> tuple[int, int]:
    """
    Remove every factor of 2 and 5 from |value|.

    Args:
        value: Non-zero integer

    Returns:
        (residual, shift) where residual is |value| with all 2s and 5s removed
        and shift is the number of decimal digits needed so that
        10**shift is divisible by |value| when residual == 1.

    Examples:
        strip_twos_and_fives(4) -> (1, 2)     # 1/4 = 0.25
        strip_twos_and_fives(8) -> (1, 3)     # 1/8 = 0.125
        strip_twos_and_fives(12) -> (3, 2)    # not terminating
    """
    residual = abs_int(value)
    twos = 0
    fives = 0
    while residual != 0 and residual % 2 == 0:
        residual //= 2
        twos += 1
    while residual != 0 and residual % 5 == 0:
        residual //= 5
        fives += 1
    return residual, max(twos, fives)


def bit_length(value: int) -> int:
    """Number of bits needed to hold |value| (0 for zero)."""
    return abs_int(value).bit_length()


def trunc_div(numerator: int, denominator: int) -> int:
    """Integer division truncating toward zero."""
    quotient = abs_int(numerator) // abs_int(denominator)
    return -quotient if (numerator < 0) != (denominator < 0) else quotient
