#!/usr/bin/env python3
"""
Money Value Type

Immutable currency amount whose value is held either as a ScaledDecimal
(the common case: parsed input, sums, exact divisions) or as a Rational
(results of currency conversion and other divisions that do not terminate in
base 10). Every operation returns a new Money.

Key Principles:
- Amounts of different currencies never combine silently
- Nothing rounds unless a RoundingMode is supplied (or configured)
- Allocation conserves the total exactly (largest remainder method)
"""

import logging
import math
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from ..core.config import NumberInputMode, get_config
from ..core.currencies import Currency, lookup, sub_unit_info
from ..core.decimal_strings import is_decimal_string
from ..core.errors import (
    CurrencyMismatchError,
    DivisionError,
    ErrorCode,
    ExchangeRateError,
    InvalidInputError,
    PrecisionLossError,
)
from ..core.fixed_point import ScaledDecimal
from ..core.json_utils import parse_json
from ..core.rational import Rational
from ..core.rounding import RoundingMode
from .parsing import NumberFormat, parse_money_string, parse_number

if TYPE_CHECKING:
    from .prices import ExchangeRate, Price

logger = logging.getLogger(__name__)

MoneyAmount = Union[ScaledDecimal, Rational]
Factor = Union[int, ScaledDecimal, Rational, str]

# Digits kept when a non-terminating Rational has to be shown as a ScaledDecimal
BALANCE_PRECISION = 18
MAX_SAFE_INTEGER = 2**53 - 1

PERCENT_PATTERN = re.compile(r"^(-?\d+(?:\.\d+)?)\s*(%|percent)$", re.IGNORECASE)


def parse_percentage(text: str) -> ScaledDecimal | None:
    """
    Parse "8.25%" or "8.25 percent" into the fraction 0.0825.

    Returns:
        ScaledDecimal fraction, or None if text is not a percentage
    """
    match = PERCENT_PATTERN.match(text.strip())
    if not match:
        return None
    return ScaledDecimal.from_decimal_string(match.group(1)).divide(100)


def _percent_fraction(percent: str | int) -> ScaledDecimal:
    """Accept "21%", "21 percent", "21" or 21 and return 0.21."""
    if isinstance(percent, int) and not isinstance(percent, bool):
        return ScaledDecimal(percent, 0).divide(100)
    fraction = parse_percentage(percent)
    if fraction is None:
        fraction = ScaledDecimal.from_decimal_string(percent.strip()).divide(100)
    return fraction


def _resolve_currency(currency: "Currency | str") -> Currency:
    if isinstance(currency, Currency):
        return currency
    return lookup(currency)


@dataclass(frozen=True, eq=False)
class Money:
    """
    Immutable money value.

    Examples:
        >>> price = Money.parse("$100.00")
        >>> str(price.add("$10.50"))
        '110.50 USD'

        >>> # Exact allocation, leftover cents go to the largest remainders
        >>> [str(m) for m in Money.parse("$100.01").allocate([1, 1, 1])]
        ['33.34 USD', '33.34 USD', '33.33 USD']

        >>> # Division that does not terminate needs a rounding mode
        >>> str(price.divide(3, RoundingMode.HALF_EVEN))
        '33.33 USD'
    """

    currency: Currency
    amount: MoneyAmount

    def __post_init__(self) -> None:
        if not isinstance(self.currency, Currency):
            raise InvalidInputError(f"currency must be a Currency, got {type(self.currency).__name__}")
        if not isinstance(self.amount, (ScaledDecimal, Rational)):
            raise InvalidInputError(
                f"amount must be a ScaledDecimal or Rational, got {type(self.amount).__name__}"
            )

    # Construction

    @classmethod
    def parse(cls, text: str) -> "Money":
        """Parse monetary text such as "$100", "EUR 1.234,56" or "1000 sat"."""
        parsed = parse_money_string(text)
        return cls(parsed.currency, parsed.amount)

    @classmethod
    def of(cls, amount: "str | int | ScaledDecimal | Rational", currency: "Currency | str") -> "Money":
        """
        Create Money from an amount and a currency.

        Decimal strings and ints are widened to at least the currency's
        canonical scale ("5" USD -> 5.00). Fraction strings ("1/3") become
        Rational amounts.

        Args:
            amount: "12.34", "1/3", 12, ScaledDecimal or Rational
            currency: Currency or currency code

        Returns:
            Money object
        """
        resolved = _resolve_currency(currency)
        if isinstance(amount, (ScaledDecimal, Rational)):
            return cls(resolved, amount)
        if isinstance(amount, int) and not isinstance(amount, bool):
            value = ScaledDecimal(amount, 0)
        elif isinstance(amount, str) and "/" in amount:
            return cls(resolved, Rational.from_fraction_string(amount))
        elif isinstance(amount, str):
            value = ScaledDecimal.from_decimal_string(amount.strip())
        else:
            raise InvalidInputError(f"Unsupported amount type: {type(amount).__name__}")
        return cls(resolved, value.normalize(max(value.scale, resolved.decimals)))

    @classmethod
    def zero(cls, currency: "Currency | str") -> "Money":
        """Zero at the currency's canonical scale."""
        resolved = _resolve_currency(currency)
        return cls(resolved, ScaledDecimal.zero(resolved.decimals))

    @classmethod
    def from_minor_units(cls, units: int, currency: "Currency | str") -> "Money":
        """
        Create Money from an integer count of the currency's minor unit.

        Example:
            Money.from_minor_units(1234, "USD") -> 12.34 USD
        """
        resolved = _resolve_currency(currency)
        return cls(resolved, ScaledDecimal(units, resolved.decimals))

    @classmethod
    def from_sub_units(cls, amount: int, unit: str) -> "Money":
        """
        Create Money from a count of a named sub-unit.

        Examples:
            Money.from_sub_units(100_000_000, "sat") -> 1.00000000 BTC
            Money.from_sub_units(1_000_000_000, "gwei") -> 1.000000000 ETH
            Money.from_sub_units(1_000_000_000, "lamport") -> 1.000000000 SOL

        Raises:
            InvalidInputError: If the unit is unknown
        """
        info = sub_unit_info(unit)
        if info is None:
            raise InvalidInputError(
                f"Unknown sub-unit: {unit!r}",
                suggestion="Use a known sub-unit such as sat, msat, gwei, wei, lamport or cent.",
            )
        return cls(info.currency, ScaledDecimal(amount, info.decimals))

    @classmethod
    def from_float(cls, value: float, currency: "Currency | str | None" = None) -> "Money":
        """
        Create Money from a binary float, subject to the number-input policy.

        The float's shortest round-trip representation is used, so 0.1 becomes
        exactly 0.1. Depending on CENT_NUMBER_INPUT_MODE, floats that may
        already have lost precision are logged, rejected, or accepted.

        Raises:
            InvalidInputError: Non-finite value, or floats disabled entirely
            PrecisionLossError: Imprecise float in "error" mode
        """
        config = get_config()
        resolved = _resolve_currency(currency or config.default_currency)

        if not math.isfinite(value):
            raise InvalidInputError(f"Invalid number input: {value}", suggestion="Use a finite number value.")
        if config.number_input_mode == NumberInputMode.NEVER:
            raise InvalidInputError(
                "Number inputs are not allowed (number input mode: never)",
                suggestion=f'Use a string instead: Money.parse("{value} {resolved.code}")',
            )

        parsed = parse_number(repr(float(value)), NumberFormat.US)

        if config.number_input_mode != NumberInputMode.SILENT:
            too_large = float(value).is_integer() and abs(value) > MAX_SAFE_INTEGER
            if too_large or parsed.scale > config.precision_warning_threshold:
                message = (
                    f"Number {value!r} may lose precision. "
                    f'Use a string for exact values: Money.parse("{value} {resolved.code}")'
                )
                if config.number_input_mode == NumberInputMode.ERROR:
                    raise PrecisionLossError(message)
                logger.warning(message)

        return cls(resolved, parsed.normalize(max(parsed.scale, resolved.decimals)))

    @classmethod
    def from_json(cls, data: Any) -> "Money":
        """
        Deserialize from ``to_json`` output (either shape) or a JSON string.

        Raises:
            InvalidInputError: If the structure is not recognised
        """
        if isinstance(data, str):
            try:
                data = parse_json(data)
            except ValueError as e:
                raise InvalidInputError("Invalid JSON input", code=ErrorCode.INVALID_JSON, cause=e) from e

        if not isinstance(data, dict) or "currency" not in data or "amount" not in data:
            raise InvalidInputError(
                "Invalid JSON input: expected object with 'currency' and 'amount'",
                code=ErrorCode.INVALID_JSON,
            )

        raw_currency = data["currency"]
        if isinstance(raw_currency, str):
            currency = lookup(raw_currency)
        elif isinstance(raw_currency, dict):
            currency = Currency.from_dict(raw_currency)
        else:
            raise InvalidInputError(f"Invalid currency in JSON: {raw_currency!r}", code=ErrorCode.INVALID_JSON)

        raw_amount = data["amount"]
        amount: MoneyAmount
        if isinstance(raw_amount, dict) and "p" in raw_amount and "q" in raw_amount:
            amount = Rational.from_json(raw_amount)
        else:
            amount = ScaledDecimal.from_json(raw_amount)
        return cls(currency, amount)

    # Views

    @property
    def balance(self) -> ScaledDecimal:
        """
        The amount as a ScaledDecimal.

        Rational amounts are converted exactly when their denominator allows
        it, otherwise truncated after 18 decimal places (or rejected when
        CENT_STRICT_PRECISION is enabled).
        """
        if isinstance(self.amount, ScaledDecimal):
            return self.amount
        try:
            return self.amount.to_fixed_point()
        except PrecisionLossError:
            if get_config().strict_precision:
                raise
            return ScaledDecimal.from_decimal_string(self.amount.to_decimal_string(BALANCE_PRECISION))

    def _as_rational(self) -> Rational:
        return Rational.coerce(self.amount)

    def _with(self, amount: MoneyAmount) -> "Money":
        return Money(self.currency, amount)

    # Currency checks

    def _check_currency(self, other: "Money", operation: str) -> None:
        if not self.currency.same_asset(other.currency):
            raise CurrencyMismatchError(
                expected=self.currency.identifier,
                actual=other.currency.identifier,
                operation=operation,
            )

    def _coerce(self, other: "Money | str", operation: str) -> "Money":
        if isinstance(other, str):
            text = other.strip()
            other = Money.of(text, self.currency) if is_decimal_string(text) else Money.parse(text)
        if not isinstance(other, Money):
            raise InvalidInputError(f"Cannot {operation} Money and {type(other).__name__}")
        self._check_currency(other, operation)
        return other

    # Addition and subtraction

    def _combine(self, other: "Money", subtract: bool) -> "Money":
        if isinstance(self.amount, ScaledDecimal) and isinstance(other.amount, ScaledDecimal):
            if subtract:
                return self._with(self.amount.subtract(other.amount))
            return self._with(self.amount.add(other.amount))
        if subtract:
            return self._with(self._as_rational().subtract(other._as_rational()))
        return self._with(self._as_rational().add(other._as_rational()))

    def add(self, other: "Money | str", rounding_mode: RoundingMode | None = None) -> "Money":
        """
        Add Money, a money string, or a percentage ("8.25%" adds 8.25%).

        Raises:
            CurrencyMismatchError: If currencies differ
        """
        if isinstance(other, str) and parse_percentage(other) is not None:
            return self.add_percent(other, rounding_mode)
        return self._combine(self._coerce(other, "add"), subtract=False)

    def subtract(self, other: "Money | str", rounding_mode: RoundingMode | None = None) -> "Money":
        """
        Subtract Money, a money string, or a percentage ("10%" takes 10% off).

        Raises:
            CurrencyMismatchError: If currencies differ
        """
        if isinstance(other, str) and parse_percentage(other) is not None:
            return self.subtract_percent(other, rounding_mode)
        return self._combine(self._coerce(other, "subtract"), subtract=True)

    # Multiplication, division, rounding

    def multiply(self, factor: Factor, rounding_mode: RoundingMode | None = None) -> "Money":
        """
        Multiply by an int, ScaledDecimal, Rational, decimal string or percentage.

        Decimal factors follow ScaledDecimal.multiply: the product is kept at
        the larger of the two scales and truncated beyond it. Rational factors
        (and Rational amounts) stay exact. When a rounding mode is supplied,
        or configured as the default, the result is rounded to the currency's
        canonical scale.

        Examples:
            Money.parse("$100.00").multiply(3) -> 300.00 USD
            Money.parse("$100.00").multiply("1.5") -> 150.00 USD
            Money.parse("$100.00").multiply("50%") -> 50.00 USD
        """
        value: int | ScaledDecimal | Rational
        if isinstance(factor, str):
            percent = parse_percentage(factor)
            if percent is not None:
                value = percent
            elif "/" in factor:
                value = Rational.from_fraction_string(factor)
            else:
                value = ScaledDecimal.from_decimal_string(factor.strip())
        elif isinstance(factor, (int, ScaledDecimal, Rational)) and not isinstance(factor, bool):
            value = factor
        else:
            raise InvalidInputError(f"Cannot multiply Money by {type(factor).__name__}")

        if isinstance(self.amount, ScaledDecimal) and not isinstance(value, Rational):
            result = self._with(self.amount.multiply(value))
        else:
            result = self._with(self._as_rational().multiply(Rational.coerce(value)))

        mode = rounding_mode or get_config().default_rounding_mode
        if mode is not None:
            return result.round(mode)
        return result

    def divide(self, divisor: Factor, rounding_mode: RoundingMode | None = None) -> "Money":
        """
        Divide by an int, ScaledDecimal, Rational or decimal string.

        Divisors made only of factors 2 and 5 (2, 4, 5, 8, 10, 2.5, ...)
        divide exactly. Any other divisor needs a rounding mode, and the
        result is rounded to the currency's canonical scale. Rational amounts
        divide exactly without one.

        Raises:
            DivisionError: Zero divisor, or an inexact division without rounding mode

        Examples:
            Money.parse("$100.00").divide(4) -> 25.0000 USD
            Money.parse("$100.00").divide(3, RoundingMode.HALF_UP) -> 33.33 USD
        """
        value: int | ScaledDecimal | Rational
        if isinstance(divisor, str):
            value = Rational.from_fraction_string(divisor) if "/" in divisor else (
                ScaledDecimal.from_decimal_string(divisor.strip())
            )
        elif isinstance(divisor, (int, ScaledDecimal, Rational)) and not isinstance(divisor, bool):
            value = divisor
        else:
            raise InvalidInputError(f"Cannot divide Money by {type(divisor).__name__}")

        divisor_rational = Rational.coerce(value)
        if divisor_rational.is_zero():
            raise DivisionError("Cannot divide by zero", divisor=str(divisor), code=ErrorCode.DIVISION_BY_ZERO)

        mode = rounding_mode or get_config().default_rounding_mode

        if isinstance(self.amount, Rational):
            result = self._with(self.amount.divide(divisor_rational))
            return result.round(mode) if mode is not None else result

        if not isinstance(value, Rational):
            try:
                return self._with(self.amount.divide(value))
            except DivisionError as e:
                if e.code != ErrorCode.DIVISION_REQUIRES_ROUNDING:
                    raise

        if mode is None:
            raise DivisionError(
                f"Division by {divisor} requires a rounding mode because {divisor} "
                "contains factors other than 2 and 5",
                divisor=str(divisor),
                code=ErrorCode.DIVISION_REQUIRES_ROUNDING,
                suggestion=f"Use: amount.divide({divisor!r}, RoundingMode.HALF_UP)",
            )
        exact = self._as_rational().divide(divisor_rational)
        return self._with(exact.round_to_scale(self.currency.decimals, mode))

    def round(self, mode: RoundingMode | None = None) -> "Money":
        """Round to the currency's canonical scale (default HALF_EXPAND)."""
        return self.round_to(self.currency.decimals, mode)

    def round_to(self, decimals: int, mode: RoundingMode | None = None) -> "Money":
        """
        Round to a number of decimal places (default HALF_EXPAND).

        Amounts already at or below that scale are widened, never rounded.

        Raises:
            InvalidInputError: If decimals is negative
        """
        if decimals < 0:
            raise InvalidInputError(
                f"Decimal places must be non-negative, got {decimals}",
                code=ErrorCode.INVALID_PRECISION,
                suggestion="Use a non-negative integer for decimal places.",
            )
        mode = mode or RoundingMode.HALF_EXPAND
        if isinstance(self.amount, ScaledDecimal) and self.amount.scale <= decimals:
            return self._with(self.amount.normalize(decimals))
        return self._with(self._as_rational().round_to_scale(decimals, mode))

    # Percentages

    def add_percent(self, percent: str | int, rounding_mode: RoundingMode | None = None) -> "Money":
        """Increase by a percentage: $100 + 8.25% = $108.25."""
        return self.multiply(ScaledDecimal(1).add(_percent_fraction(percent)), rounding_mode)

    def subtract_percent(self, percent: str | int, rounding_mode: RoundingMode | None = None) -> "Money":
        """Decrease by a percentage: $100 - 10% = $90."""
        return self.multiply(ScaledDecimal(1).subtract(_percent_fraction(percent)), rounding_mode)

    def percent_of(self, percent: str | int, rounding_mode: RoundingMode | None = None) -> "Money":
        """Take a percentage of this amount: 50% of $100 = $50."""
        return self.multiply(_percent_fraction(percent), rounding_mode)

    def remove_percent(self, percent: str | int, rounding_mode: RoundingMode | None = None) -> "Money":
        """
        Base amount of a total that already includes a percentage.

        Formula: total / (1 + percent)

        Example:
            Money.parse("$121.00").remove_percent("21%", RoundingMode.HALF_UP) -> 100.00 USD
        """
        return self.divide(ScaledDecimal(1).add(_percent_fraction(percent)), rounding_mode)

    def extract_percent(self, percent: str | int, rounding_mode: RoundingMode | None = None) -> "Money":
        """
        Percentage portion of a total that already includes it.

        Formula: total - total / (1 + percent)

        Example:
            Money.parse("$121.00").extract_percent("21%", RoundingMode.HALF_UP) -> 21.00 USD
        """
        return self.subtract(self.remove_percent(percent, rounding_mode))

    # Precision splitting and allocation

    def concretize(self) -> tuple["Money", "Money"]:
        """
        Split into an amount at the currency's canonical scale and the change.

        The concrete part is truncated toward zero; the change holds the
        remainder at the original (finer) scale, so concrete + change equals
        the original exactly.

        Returns:
            (concrete, change)

        Example:
            Money.parse("$100.12345").concretize() -> (100.12 USD, 0.00345 USD)
        """
        decimals = self.currency.decimals
        if isinstance(self.amount, ScaledDecimal):
            if self.amount.scale == decimals:
                return self, Money(self.currency, ScaledDecimal.zero(decimals))
            concrete = self._with(self.amount.normalize(decimals, allow_lossy=True))
        else:
            concrete = self._with(self.amount.round_to_scale(decimals, RoundingMode.TRUNC))
        return concrete, self.subtract(concrete)

    def allocate(self, ratios: list[int], distribute_fractional_units: bool = True) -> list["Money"]:
        """
        Split proportionally to integer ratios, preserving the exact total.

        Each share starts as floor(total * ratio / sum(ratios)) in units of the
        working scale; the units left over go one each to the shares with the
        largest remainders (earlier shares win ties).

        When distribute_fractional_units is False and the amount is finer than
        the currency's canonical scale, the sub-unit change is split off first
        and appended as a final extra element (only when non-zero).

        Args:
            ratios: Non-negative integers with a positive sum
            distribute_fractional_units: Spread sub-unit precision across shares

        Returns:
            List of Money shares (plus optional change)

        Raises:
            InvalidInputError: Empty ratios, negative ratio, or all ratios zero

        Examples:
            Money.parse("$100").allocate([1, 2, 1]) -> [25.00, 50.00, 25.00]
            Money.parse("$100.00015").allocate([1, 1, 1], False)
                -> [33.34, 33.33, 33.33, 0.00015]
        """
        if not ratios:
            raise InvalidInputError(
                "Cannot allocate with empty ratios array",
                code=ErrorCode.EMPTY_ARRAY,
                suggestion="Provide at least one ratio for allocation.",
                example="money.allocate([1, 2, 1])",
            )
        for ratio in ratios:
            if isinstance(ratio, bool) or not isinstance(ratio, int):
                raise InvalidInputError(
                    f"Ratios must be integers, got {ratio!r}", code=ErrorCode.INVALID_RATIO
                )
            if ratio < 0:
                raise InvalidInputError(
                    f"Cannot allocate with negative ratios: got {ratio}",
                    code=ErrorCode.INVALID_RATIO,
                    suggestion="All ratios must be non-negative integers.",
                )
        total_ratio = sum(ratios)
        if total_ratio == 0:
            raise InvalidInputError(
                "Cannot allocate with all zero ratios",
                code=ErrorCode.INVALID_RATIO,
                suggestion="At least one ratio must be greater than zero.",
            )

        working = self.balance
        change: Money | None = None
        if not distribute_fractional_units and working.scale > self.currency.decimals:
            concrete, change = self.concretize()
            working = concrete.balance

        total = working.amount
        shares = [total * ratio // total_ratio for ratio in ratios]
        remainders = [total * ratio % total_ratio for ratio in ratios]

        leftover = total - sum(shares)
        by_remainder = sorted(range(len(ratios)), key=lambda i: -remainders[i])
        for index in by_remainder[:leftover]:
            shares[index] += 1

        result = [Money(self.currency, ScaledDecimal(share, working.scale)) for share in shares]
        if change is not None and not change.is_zero():
            result.append(change)
        return result

    def distribute(self, parts: int, distribute_fractional_units: bool = True) -> list["Money"]:
        """
        Split into ``parts`` near-equal shares (allocate with equal ratios).

        Raises:
            InvalidInputError: If parts is not a positive integer
        """
        if isinstance(parts, bool) or not isinstance(parts, int) or parts <= 0:
            raise InvalidInputError(
                f"Parts must be a positive integer, got {parts!r}",
                suggestion="Provide a positive integer for the number of parts.",
                example="money.distribute(3)",
            )
        return self.allocate([1] * parts, distribute_fractional_units)

    # Conversion

    def convert(self, rate: "Price | ExchangeRate") -> "Money":
        """
        Convert to the other currency of a Price or ExchangeRate, exactly.

        The result is a Rational amount: converting $100 at $300 = 1 BTC gives
        exactly 1/3 BTC. Materialize it later with round() or to_decimal_string().

        Raises:
            CurrencyMismatchError: If neither side of the rate is in this currency
            ExchangeRateError: If the matching side of the rate is zero
        """
        first, second = rate.as_pair()
        if self.currency.same_asset(first.currency):
            source, target = first, second
        elif self.currency.same_asset(second.currency):
            source, target = second, first
        else:
            raise CurrencyMismatchError(
                expected=f"{first.currency.identifier} or {second.currency.identifier}",
                actual=self.currency.identifier,
                operation="convert",
                code=ErrorCode.EXCHANGE_RATE_MISMATCH,
            )

        source_value = source._as_rational()
        target_value = target._as_rational()
        if source_value.is_zero():
            raise ExchangeRateError(
                f"Cannot convert using a zero {source.currency.identifier} amount",
                code=ErrorCode.INVALID_EXCHANGE_RATE,
            )

        ratio = Rational(target_value.p * source_value.q, target_value.q * source_value.p)
        return Money(target.currency, self._as_rational().multiply(ratio).simplify())

    # Predicates and sign

    def is_zero(self) -> bool:
        return self.amount.is_zero()

    def is_positive(self) -> bool:
        return self.amount.is_positive()

    def is_negative(self) -> bool:
        return self.amount.is_negative()

    def absolute(self) -> "Money":
        return self._with(self.amount.absolute())

    def negate(self) -> "Money":
        return self._with(self.amount.negate())

    def has_change(self) -> bool:
        """True when there are non-zero digits after the decimal point."""
        balance = self.balance
        return balance.scale > 0 and balance.amount % (10**balance.scale) != 0

    def has_sub_units(self) -> bool:
        """True when there are non-zero digits beyond the currency's canonical scale."""
        balance = self.balance
        extra = balance.scale - self.currency.decimals
        return extra > 0 and balance.amount % (10**extra) != 0

    # Comparison

    def compare(self, other: "Money | str") -> int:
        """
        Return -1, 0 or 1.

        Raises:
            CurrencyMismatchError: If currencies differ
        """
        other = self._coerce(other, "compare")
        if isinstance(self.amount, ScaledDecimal) and isinstance(other.amount, ScaledDecimal):
            return self.amount.compare(other.amount)
        return self._as_rational().compare(other._as_rational())

    def equals(self, other: "Money | str") -> bool:
        """Same currency and same value (scale may differ)."""
        try:
            return self.compare(other) == 0
        except CurrencyMismatchError:
            return False

    def less_than(self, other: "Money | str") -> bool:
        return self.compare(other) < 0

    def less_than_or_equal(self, other: "Money | str") -> bool:
        return self.compare(other) <= 0

    def greater_than(self, other: "Money | str") -> bool:
        return self.compare(other) > 0

    def greater_than_or_equal(self, other: "Money | str") -> bool:
        return self.compare(other) >= 0

    def max(self, *others: "Money | str") -> "Money":
        """Largest of this and others (all in the same currency)."""
        result = self
        for other in others:
            candidate = self._coerce(other, "compare")
            if candidate.compare(result) > 0:
                result = candidate
        return result

    def min(self, *others: "Money | str") -> "Money":
        """Smallest of this and others (all in the same currency)."""
        result = self
        for other in others:
            candidate = self._coerce(other, "compare")
            if candidate.compare(result) < 0:
                result = candidate
        return result

    # Bounds

    def _bound(self, value: "Money | str | int", operation: str) -> "Money":
        if isinstance(value, int) and not isinstance(value, bool):
            return Money.of(value, self.currency)
        return self._coerce(value, operation)

    def clamp(self, minimum: "Money | str | int", maximum: "Money | str | int") -> "Money":
        """
        Restrict to the inclusive range [minimum, maximum].

        Bounds may be Money, money strings, or decimal strings and ints read
        in this currency ("5.50" is 5.50 of this currency). When clamped, the
        bound itself is returned.

        Raises:
            InvalidInputError: If minimum is greater than maximum
            CurrencyMismatchError: If a bound is in another currency

        Examples:
            Money.parse("$150").clamp("$0", "$100") -> 100.00 USD
            Money.parse("-$5").clamp(0, 100) -> 0.00 USD
        """
        low = self._bound(minimum, "clamp")
        high = self._bound(maximum, "clamp")
        if low.compare(high) > 0:
            raise InvalidInputError(
                f"Invalid clamp range: minimum {low} is greater than maximum {high}",
                code=ErrorCode.INVALID_RANGE,
                suggestion="Pass the smaller bound first.",
            )
        if self.compare(low) < 0:
            return low
        if self.compare(high) > 0:
            return high
        return self

    def at_least(self, minimum: "Money | str | int") -> "Money":
        """This value, or ``minimum`` when this is below it."""
        low = self._bound(minimum, "at_least")
        return low if self.compare(low) < 0 else self

    def at_most(self, maximum: "Money | str | int") -> "Money":
        """This value, or ``maximum`` when this is above it."""
        high = self._bound(maximum, "at_most")
        return high if self.compare(high) > 0 else self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Money):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        # Currencies match by code or by name, so only the value is hashed
        return hash(self.amount)

    def __lt__(self, other: "Money") -> bool:
        return self.less_than(other)

    def __le__(self, other: "Money") -> bool:
        return self.less_than_or_equal(other)

    def __gt__(self, other: "Money") -> bool:
        return self.greater_than(other)

    def __ge__(self, other: "Money") -> bool:
        return self.greater_than_or_equal(other)

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __mul__(self, factor: Factor) -> "Money":
        return self.multiply(factor)

    def __truediv__(self, divisor: Factor) -> "Money":
        return self.divide(divisor)

    def __neg__(self) -> "Money":
        return self.negate()

    # Output

    def to_decimal_string(
        self, max_decimals: int | None = None, rounding_mode: RoundingMode = RoundingMode.HALF_EXPAND
    ) -> str:
        """
        Exact decimal text of the amount, optionally rounded for display.

        Without max_decimals a ScaledDecimal keeps its scale and a Rational is
        written out by long division (truncated after 50 digits when it does
        not terminate).
        """
        if max_decimals is not None:
            if isinstance(self.amount, ScaledDecimal) and self.amount.scale <= max_decimals:
                return self.amount.to_decimal_string()
            return self._as_rational().round_to_scale(max_decimals, rounding_mode).to_decimal_string()
        return self.amount.to_decimal_string()

    def to_json(self, compact: bool = False) -> dict[str, Any]:
        """
        Serialize to a JSON-friendly dict.

        Args:
            compact: Write the currency as its code instead of the full object
        """
        return {
            "currency": self.currency.identifier if compact else self.currency.to_dict(),
            "amount": self.amount.to_json(),
        }

    def __str__(self) -> str:
        return f"{self.to_decimal_string()} {self.currency.identifier}"

    def __repr__(self) -> str:
        return f"Money(currency={self.currency.identifier!r}, amount={self.amount!r})"


def sum_money(values: list[Money]) -> Money:
    """
    Add a non-empty list of Money values of one currency.

    Raises:
        InvalidInputError: If values is empty
        CurrencyMismatchError: If currencies differ
    """
    if not values:
        raise InvalidInputError("Cannot sum an empty list of Money", code=ErrorCode.EMPTY_ARRAY)
    total = values[0]
    for value in values[1:]:
        total = total.add(value)
    return total


def avg_money(values: list[Money], rounding_mode: RoundingMode | None = None) -> Money:
    """
    Arithmetic mean of a non-empty list of Money values of one currency.

    An average that terminates in base 10 is exact and needs no rounding
    ($10, $20, $30 -> $20.00). Otherwise the mean is rounded with
    ``rounding_mode`` to the currency's canonical scale.

    Raises:
        InvalidInputError: If values is empty
        CurrencyMismatchError: If currencies differ
        DivisionError: If the mean does not terminate and no rounding mode is available
    """
    if not values:
        raise InvalidInputError("Cannot avg an empty list of Money", code=ErrorCode.EMPTY_ARRAY)
    if len(values) == 1:
        return values[0]

    total = sum_money(values)
    count = len(values)
    try:
        mean = total._as_rational().divide(Rational(count)).to_fixed_point()
    except PrecisionLossError:
        return total.divide(count, rounding_mode)
    return Money(total.currency, mean.normalize(max(mean.scale, total.currency.decimals)))


__all__ = ["Money", "MoneyAmount", "avg_money", "parse_percentage", "sum_money"]
