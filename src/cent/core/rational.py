#!/usr/bin/env python3
"""
Rational Exact-Fraction Type

Immutable p/q fraction over arbitrary-precision integers, used wherever a
result cannot be expressed as a terminating decimal (currency conversion,
division by 3, ...). A Rational only becomes a ScaledDecimal when the caller
asks for it, either exactly or through an explicit rounding budget.
"""

import logging
from dataclasses import dataclass

from .decimal_strings import RationalString
from .errors import DivisionError, ErrorCode, InvalidInputError, PrecisionLossError
from .fixed_point import ScaledDecimal
from .math_utils import abs_int, bit_length, gcd, pow10, strip_twos_and_fives
from .rounding import RoundingMode, apply_rounding

logger = logging.getLogger(__name__)

DEFAULT_DECIMAL_PRECISION = 50
MAX_PRECISION_SEARCH = 50


@dataclass(frozen=True, eq=False)
class Rational:
    """
    Immutable fraction p/q with q != 0.

    Not kept in lowest terms automatically; add and subtract simplify their
    results, multiply and divide do not. Equality is by value.

    Examples:
        >>> third = Rational(1, 3)
        >>> str(third.add(Rational(1, 6)))
        '1/2'
        >>> Rational(1, 4).to_fixed_point()
        ScaledDecimal(amount=25, scale=2)
    """

    p: int
    q: int = 1

    def __post_init__(self) -> None:
        for name, value in (("p", self.p), ("q", self.q)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInputError(f"Rational {name} must be an int, got {type(value).__name__}")
        if self.q == 0:
            raise DivisionError("Rational denominator cannot be zero", divisor=0)

    # Construction

    @classmethod
    def from_int(cls, value: int) -> "Rational":
        return cls(value, 1)

    @classmethod
    def from_scaled_decimal(cls, value: ScaledDecimal) -> "Rational":
        return cls(value.amount, pow10(value.scale))

    @classmethod
    def from_decimal_string(cls, text: str) -> "Rational":
        """Parse "1.25" into 125/100."""
        return cls.from_scaled_decimal(ScaledDecimal.from_decimal_string(text))

    @classmethod
    def from_fraction_string(cls, text: str) -> "Rational":
        """Parse "1/3" (surrounding and inner whitespace allowed)."""
        p, q = RationalString.parse(text).parts()
        return cls(p, q)

    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse either a fraction string or a decimal string."""
        if "/" in text:
            return cls.from_fraction_string(text)
        return cls.from_decimal_string(text.strip())

    @classmethod
    def from_json(cls, data: object) -> "Rational":
        """
        Deserialize from {"p": "...", "q": "..."}.

        Raises:
            InvalidInputError: If data is not an object with integer-string p and q
        """
        if not isinstance(data, dict) or "p" not in data or "q" not in data:
            raise InvalidInputError(
                f"Invalid rational JSON: {data!r}",
                code=ErrorCode.INVALID_JSON,
                suggestion='Use an object such as {"p": "1", "q": "3"}.',
            )
        try:
            return cls(int(str(data["p"])), int(str(data["q"])))
        except ValueError as e:
            raise InvalidInputError(
                f"Invalid rational JSON: {data!r}", code=ErrorCode.INVALID_JSON, cause=e
            ) from e

    @classmethod
    def coerce(cls, value: "Rational | ScaledDecimal | int | str") -> "Rational":
        """Promote an int, ScaledDecimal or string to a Rational."""
        if isinstance(value, Rational):
            return value
        if isinstance(value, ScaledDecimal):
            return cls.from_scaled_decimal(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_int(value)
        if isinstance(value, str):
            return cls.parse(value)
        raise InvalidInputError(f"Cannot convert {type(value).__name__} to Rational")

    # Arithmetic

    def add(self, other: "Rational") -> "Rational":
        """Exact sum, simplified."""
        other = Rational.coerce(other)
        return Rational(self.p * other.q + other.p * self.q, self.q * other.q).simplify()

    def subtract(self, other: "Rational") -> "Rational":
        """Exact difference, simplified."""
        other = Rational.coerce(other)
        return Rational(self.p * other.q - other.p * self.q, self.q * other.q).simplify()

    def multiply(self, other: "Rational") -> "Rational":
        """Exact product. Not simplified."""
        other = Rational.coerce(other)
        return Rational(self.p * other.p, self.q * other.q)

    def divide(self, other: "Rational") -> "Rational":
        """
        Exact quotient. Not simplified.

        Raises:
            DivisionError: If other is zero
        """
        other = Rational.coerce(other)
        if other.p == 0:
            raise DivisionError("Cannot divide by zero", divisor=str(other), code=ErrorCode.DIVISION_BY_ZERO)
        return Rational(self.p * other.q, self.q * other.p)

    def simplify(self) -> "Rational":
        """Reduce to lowest terms with a positive denominator."""
        if self.p == 0:
            return Rational(0, 1)
        divisor = gcd(self.p, self.q)
        p, q = self.p // divisor, self.q // divisor
        if q < 0:
            p, q = -p, -q
        return Rational(p, q)

    def invert(self) -> "Rational":
        """Return q/p."""
        if self.p == 0:
            raise DivisionError("Cannot invert zero", divisor=0)
        return Rational(self.q, self.p)

    # Sign helpers

    def is_zero(self) -> bool:
        return self.p == 0

    def is_negative(self) -> bool:
        return (self.p < 0) != (self.q < 0) and self.p != 0

    def is_positive(self) -> bool:
        return (self.p < 0) == (self.q < 0) and self.p != 0

    def negate(self) -> "Rational":
        return Rational(-self.p, self.q)

    def absolute(self) -> "Rational":
        return Rational(abs_int(self.p), abs_int(self.q))

    # Comparison

    def compare(self, other: "Rational | ScaledDecimal | int | str") -> int:
        """Return -1, 0 or 1 by cross-multiplication."""
        other = Rational.coerce(other)
        diff = self.p * other.q - other.p * self.q
        if (self.q < 0) != (other.q < 0):
            diff = -diff
        return (diff > 0) - (diff < 0)

    def equals(self, other: "Rational | ScaledDecimal | int | str") -> bool:
        return self.compare(other) == 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Rational, ScaledDecimal)):
            return self.compare(other) == 0
        return NotImplemented

    def __hash__(self) -> int:
        simplified = self.simplify()
        return hash((simplified.p, simplified.q))

    def __lt__(self, other: "Rational") -> bool:
        return self.compare(other) < 0

    def __le__(self, other: "Rational") -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: "Rational") -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: "Rational") -> bool:
        return self.compare(other) >= 0

    # Conversion to fixed point

    def to_fixed_point(
        self,
        max_precision: int | None = None,
        max_bits: int | None = None,
        rounding_mode: RoundingMode = RoundingMode.HALF_EXPAND,
    ) -> ScaledDecimal:
        """
        Convert to a ScaledDecimal, exactly or within a budget.

        Without a budget the conversion is exact: it succeeds only when the
        reduced denominator is a product of 2s and 5s, i.e. a divisor of
        some power of ten (1/4 -> 0.25). With ``max_precision`` (significant
        digits) or ``max_bits`` (bits of amount plus bits of scale) the value
        is rounded with ``rounding_mode``.

        Args:
            max_precision: Total significant decimal digits to keep
            max_bits: Bit budget for the resulting representation
            rounding_mode: Rounding applied on the lossy path

        Returns:
            ScaledDecimal

        Raises:
            PrecisionLossError: Exact path with a non-terminating value
            InvalidInputError: Both budgets given, or a non-positive budget
        """
        if max_precision is not None and max_bits is not None:
            raise InvalidInputError(
                "Specify either max_precision or max_bits, not both",
                code=ErrorCode.INVALID_PRECISION,
            )
        if max_precision is not None:
            return self._to_fixed_point_with_precision(max_precision, rounding_mode)
        if max_bits is not None:
            return self._to_fixed_point_with_bits(max_bits, rounding_mode)
        return self._to_fixed_point_exact()

    def _to_fixed_point_exact(self) -> ScaledDecimal:
        reduced = self.simplify()
        residual, scale = strip_twos_and_fives(reduced.q)
        if residual != 1:
            raise PrecisionLossError(
                f"Cannot convert {reduced} to fixed point: denominator {reduced.q} is not a power of 10",
                suggestion="Pass max_precision or max_bits with a rounding mode.",
            )
        return ScaledDecimal(reduced.p * pow10(scale) // reduced.q, scale)

    def _magnitude(self) -> int:
        """Number of integer digits, floor(log10(|p/q|)) + 1, computed exactly."""
        p, q = abs_int(self.p), abs_int(self.q)
        exponent = len(str(p)) - len(str(q))
        if exponent >= 0:
            fits = p >= q * pow10(exponent)
        else:
            fits = p * pow10(-exponent) >= q
        return exponent + 1 if fits else exponent

    def _to_fixed_point_with_precision(self, max_precision: int, rounding_mode: RoundingMode) -> ScaledDecimal:
        if isinstance(max_precision, bool) or not isinstance(max_precision, int) or max_precision <= 0:
            raise InvalidInputError(
                f"max_precision must be a positive integer, got {max_precision!r}",
                code=ErrorCode.INVALID_PRECISION,
            )
        if self.p == 0:
            return ScaledDecimal(0, 0)

        # Integer digits are never dropped, so the scale bottoms out at zero
        decimal_places = max(0, max_precision - self._magnitude())
        amount = apply_rounding(self.p * pow10(decimal_places), self.q, rounding_mode)
        return ScaledDecimal(amount, decimal_places)

    def _to_fixed_point_with_bits(self, max_bits: int, rounding_mode: RoundingMode) -> ScaledDecimal:
        if isinstance(max_bits, bool) or not isinstance(max_bits, int) or max_bits <= 0:
            raise InvalidInputError(
                f"max_bits must be a positive integer, got {max_bits!r}",
                code=ErrorCode.INVALID_PRECISION,
            )

        best: ScaledDecimal | None = None
        for precision in range(1, MAX_PRECISION_SEARCH + 1):
            candidate = self._to_fixed_point_with_precision(precision, rounding_mode)
            if bit_length(candidate.amount) + bit_length(candidate.scale) <= max_bits:
                best = candidate

        if best is None:
            raise PrecisionLossError(
                f"Cannot represent {self} within {max_bits} bits",
                code=ErrorCode.INVALID_PRECISION,
                suggestion="Increase max_bits.",
            )
        logger.debug("Converted %s within %d bits to %s", self, max_bits, best)
        return best

    def round_to_scale(self, scale: int, rounding_mode: RoundingMode) -> ScaledDecimal:
        """Round to exactly ``scale`` fraction digits."""
        if scale < 0:
            raise InvalidInputError(
                f"Decimal places must be non-negative, got {scale}",
                code=ErrorCode.INVALID_PRECISION,
            )
        return ScaledDecimal(apply_rounding(self.p * pow10(scale), self.q, rounding_mode), scale)

    # String forms

    def to_decimal_string(self, precision: int = DEFAULT_DECIMAL_PRECISION) -> str:
        """
        Long-division decimal rendering, truncated after ``precision`` digits.

        Trailing zeros and a trailing decimal point are dropped.

        Examples:
            Rational(1, 4).to_decimal_string() -> "0.25"
            Rational(1, 3).to_decimal_string(5) -> "0.33333"
            Rational(-6, 3).to_decimal_string() -> "-2"
        """
        p, q = abs_int(self.p), abs_int(self.q)
        whole, remainder = divmod(p, q)

        digits = []
        while remainder != 0 and len(digits) < precision:
            remainder *= 10
            digit, remainder = divmod(remainder, q)
            digits.append(str(digit))

        fraction = "".join(digits).rstrip("0")
        sign = "-" if self.is_negative() else ""
        if fraction:
            return f"{sign}{whole}.{fraction}"
        if whole == 0:
            return "0"
        return f"{sign}{whole}"

    def to_json(self) -> dict[str, str]:
        """Serialize as {"p": str, "q": str} with a positive denominator."""
        p, q = (-self.p, -self.q) if self.q < 0 else (self.p, self.q)
        return {"p": str(p), "q": str(q)}

    def __str__(self) -> str:
        simplified = self.simplify()
        return f"{simplified.p}/{simplified.q}"

    def __repr__(self) -> str:
        return f"Rational(p={self.p}, q={self.q})"
