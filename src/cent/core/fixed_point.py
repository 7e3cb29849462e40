#!/usr/bin/env python3
"""
ScaledDecimal Fixed-Point Type

Immutable fixed-point number stored as an arbitrary-precision integer plus a
non-negative scale: value = amount * 10**(-scale).

Key Principles:
- Never use floating-point arithmetic
- Addition and subtraction are exact (operands normalized to the larger scale)
- Division is exact or it fails; it never silently rounds
- Trailing zeros are significant and preserved in string form ("100.50")
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from .decimal_strings import DecimalString
from .errors import DivisionError, ErrorCode, InvalidInputError, PrecisionLossError
from .math_utils import abs_int, gcd, pow10, strip_twos_and_fives, trunc_div

if TYPE_CHECKING:
    from .rational import Rational


ScaledDecimalLike = Union["ScaledDecimal", str]


def _check_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"{name} must be an int, got {type(value).__name__}")
    return value


@dataclass(frozen=True, eq=False)
class ScaledDecimal:
    """
    Immutable fixed-point decimal.

    Two ScaledDecimals are equal when their values agree, regardless of scale:
    1.23 at scale 2 equals 1.230 at scale 3.

    Examples:
        >>> price = ScaledDecimal.from_decimal_string("100.50")
        >>> price.amount, price.scale
        (10050, 2)
        >>> str(price.add(ScaledDecimal(5, 3)))
        '100.505'
        >>> str(ScaledDecimal(100, 0).divide(4))
        '25.00'
    """

    amount: int
    scale: int = 0

    def __post_init__(self) -> None:
        _check_int(self.amount, "amount")
        _check_int(self.scale, "scale")
        if self.scale < 0:
            raise InvalidInputError(
                f"Scale must be non-negative, got {self.scale}",
                code=ErrorCode.INVALID_PRECISION,
            )

    # Construction

    @classmethod
    def zero(cls, scale: int = 0) -> "ScaledDecimal":
        """Zero at the given scale."""
        return cls(0, scale)

    @classmethod
    def from_decimal_string(cls, text: str) -> "ScaledDecimal":
        """
        Parse a plain decimal literal, keeping its scale.

        Args:
            text: String like "123", "-0.50" or "100.00"

        Returns:
            ScaledDecimal whose scale is the number of written fraction digits

        Raises:
            ParseError: If text is not a plain decimal ("123." and ".5" are rejected)
        """
        literal = DecimalString.parse(text)
        negative = literal.startswith("-")
        digits = literal[1:] if negative else str(literal)
        whole, _, fraction = digits.partition(".")
        amount = int(whole + fraction)
        return cls(-amount if negative else amount, len(fraction))

    @classmethod
    def parse_string(cls, text: str, scale: int) -> "ScaledDecimal":
        """
        Parse a decimal literal and express it at exactly ``scale`` digits.

        Raises:
            ParseError: If text is malformed
            PrecisionLossError: If text has more significant fraction digits than scale
        """
        parsed = cls.from_decimal_string(text)
        result = parsed.normalize(scale)
        if result.scale != scale:
            raise PrecisionLossError(
                f"{text!r} cannot be represented with {scale} decimal places",
                suggestion="Increase the scale or round explicitly.",
            )
        return result

    @classmethod
    def from_json(cls, data: object) -> "ScaledDecimal":
        """
        Deserialize from a decimal string or a legacy {"amount", "decimals"} object.

        Raises:
            InvalidInputError: If data has neither shape
        """
        if isinstance(data, str):
            return cls.from_decimal_string(data)
        if isinstance(data, dict) and "amount" in data and "decimals" in data:
            try:
                return cls(int(str(data["amount"])), int(str(data["decimals"])))
            except ValueError as e:
                raise InvalidInputError(
                    f"Invalid fixed-point JSON: {data!r}", code=ErrorCode.INVALID_JSON, cause=e
                ) from e
        raise InvalidInputError(
            f"Invalid fixed-point JSON: {data!r}",
            code=ErrorCode.INVALID_JSON,
            suggestion='Use a decimal string such as "100.50".',
        )

    @classmethod
    def coerce(cls, value: "ScaledDecimalLike") -> "ScaledDecimal":
        """Accept a ScaledDecimal or a decimal string."""
        if isinstance(value, ScaledDecimal):
            return value
        if isinstance(value, str):
            return cls.from_decimal_string(value)
        raise InvalidInputError(f"Expected ScaledDecimal or decimal string, got {type(value).__name__}")

    # Scale handling

    def normalize(self, target_scale: int, allow_lossy: bool = False) -> "ScaledDecimal":
        """
        Express this value at another scale.

        Scaling up is always exact. Scaling down truncates toward zero when
        allow_lossy is set; otherwise it only happens when the discarded
        digits are all zero, and the value is returned unchanged when they
        are not.

        Args:
            target_scale: Desired scale
            allow_lossy: Permit dropping non-zero digits

        Returns:
            New ScaledDecimal (or self when a safe scale-down is impossible)
        """
        _check_int(target_scale, "target_scale")
        if target_scale < 0:
            raise InvalidInputError(
                f"Scale must be non-negative, got {target_scale}",
                code=ErrorCode.INVALID_PRECISION,
            )
        if target_scale == self.scale:
            return ScaledDecimal(self.amount, self.scale)
        if target_scale > self.scale:
            return ScaledDecimal(self.amount * pow10(target_scale - self.scale), target_scale)

        factor = pow10(self.scale - target_scale)
        if not allow_lossy and self.amount % factor != 0:
            return self
        return ScaledDecimal(trunc_div(self.amount, factor), target_scale)

    def _aligned(self, other: "ScaledDecimal") -> tuple[int, int, int]:
        scale = max(self.scale, other.scale)
        return (
            self.amount * pow10(scale - self.scale),
            other.amount * pow10(scale - other.scale),
            scale,
        )

    # Arithmetic

    def add(self, other: "ScaledDecimalLike") -> "ScaledDecimal":
        """Exact sum at the larger of the two scales."""
        a, b, scale = self._aligned(ScaledDecimal.coerce(other))
        return ScaledDecimal(a + b, scale)

    def subtract(self, other: "ScaledDecimalLike") -> "ScaledDecimal":
        """Exact difference at the larger of the two scales."""
        a, b, scale = self._aligned(ScaledDecimal.coerce(other))
        return ScaledDecimal(a - b, scale)

    def multiply(self, other: "int | ScaledDecimalLike") -> "ScaledDecimal":
        """
        Multiply by an integer or another fixed-point value.

        An integer factor keeps the scale and is exact. A fixed-point factor
        produces a result at max(scale_a, scale_b): the full product is
        computed and then truncated toward zero. This discards digits beyond
        the larger operand scale (1.23 * 0.234 = 0.287, not 0.28782). Use
        ``to_rational().multiply(...)`` when every digit matters.
        """
        if isinstance(other, int) and not isinstance(other, bool):
            return ScaledDecimal(self.amount * other, self.scale)

        a, b, scale = self._aligned(ScaledDecimal.coerce(other))
        return ScaledDecimal(trunc_div(a * b, pow10(scale)), scale)

    def divide(self, divisor: "int | ScaledDecimalLike") -> "ScaledDecimal":
        """
        Divide exactly, growing the scale as needed.

        Only divisors whose magnitude factors into 2s and 5s are accepted, since
        only those yield a terminating decimal.

        Args:
            divisor: int, ScaledDecimal or decimal string

        Returns:
            Exact quotient

        Raises:
            DivisionError: Zero divisor, or a divisor with other prime factors

        Examples:
            ScaledDecimal(100, 0).divide(4) -> 25.00
            ScaledDecimal(100, 1).divide(ScaledDecimal(25, 1)) -> 4.000
        """
        if isinstance(divisor, int) and not isinstance(divisor, bool):
            return self._divide_int(divisor, self.amount, self.scale, "divisor")

        other = ScaledDecimal.coerce(divisor)
        # a/10^s1 / (b/10^s2) == (a * 10^s2) / b at scale s1
        numerator = self.amount * pow10(other.scale)
        return self._divide_int(other.amount, numerator, self.scale, "divisor numerator")

    @staticmethod
    def _divide_int(divisor: int, numerator: int, scale: int, label: str) -> "ScaledDecimal":
        if divisor == 0:
            raise DivisionError("Cannot divide by zero", divisor=divisor, code=ErrorCode.DIVISION_BY_ZERO)

        residual, shift = strip_twos_and_fives(divisor)
        if residual != 1:
            raise DivisionError(
                f"Cannot divide by {divisor} exactly: {label} must be composed only of factors of 2 and 5",
                divisor=divisor,
                code=ErrorCode.DIVISION_REQUIRES_ROUNDING,
                suggestion="Convert to a Rational or supply a rounding mode.",
            )

        quotient = numerator * pow10(shift) // abs_int(divisor)
        if divisor < 0:
            quotient = -quotient
        return ScaledDecimal(quotient, scale + shift)

    # Sign helpers

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def negate(self) -> "ScaledDecimal":
        return ScaledDecimal(-self.amount, self.scale)

    def absolute(self) -> "ScaledDecimal":
        return ScaledDecimal(abs_int(self.amount), self.scale)

    # Comparison

    def compare(self, other: "ScaledDecimalLike") -> int:
        """Return -1, 0 or 1 comparing values after aligning scales."""
        a, b, _ = self._aligned(ScaledDecimal.coerce(other))
        return (a > b) - (a < b)

    def equals(self, other: "ScaledDecimalLike") -> bool:
        return self.compare(other) == 0

    def max(self, *others: "ScaledDecimalLike") -> "ScaledDecimal":
        result = self
        for other in map(ScaledDecimal.coerce, others):
            if other.compare(result) > 0:
                result = other
        return result

    def min(self, *others: "ScaledDecimalLike") -> "ScaledDecimal":
        result = self
        for other in map(ScaledDecimal.coerce, others):
            if other.compare(result) < 0:
                result = other
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ScaledDecimal):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        # Hash the reduced fraction so equal values (and equal Rationals) collide
        denominator = pow10(self.scale)
        divisor = gcd(self.amount, denominator)
        return hash((self.amount // divisor, denominator // divisor))

    def __lt__(self, other: "ScaledDecimal") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "ScaledDecimal") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "ScaledDecimal") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "ScaledDecimal") -> bool:
        return self.compare(other) >= 0

    def __add__(self, other: "ScaledDecimal") -> "ScaledDecimal":
        return self.add(other)

    def __sub__(self, other: "ScaledDecimal") -> "ScaledDecimal":
        return self.subtract(other)

    def __neg__(self) -> "ScaledDecimal":
        return self.negate()

    # Conversion

    def to_rational(self) -> "Rational":
        """Exact rational value amount / 10**scale."""
        from .rational import Rational

        return Rational(self.amount, pow10(self.scale))

    def to_decimal_string(self) -> str:
        """
        Render with exactly ``scale`` fraction digits.

        Examples:
            ScaledDecimal(10050, 2) -> "100.50"
            ScaledDecimal(-5, 3) -> "-0.005"
        """
        digits = str(abs_int(self.amount))
        sign = "-" if self.amount < 0 else ""
        if self.scale == 0:
            return f"{sign}{digits}"
        digits = digits.rjust(self.scale + 1, "0")
        return f"{sign}{digits[:-self.scale]}.{digits[-self.scale:]}"

    def to_json(self) -> str:
        """Serialize as a decimal string preserving trailing zeros."""
        return self.to_decimal_string()

    def __str__(self) -> str:
        return self.to_decimal_string()

    def __repr__(self) -> str:
        return f"ScaledDecimal(amount={self.amount}, scale={self.scale})"
