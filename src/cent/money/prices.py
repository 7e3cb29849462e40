#!/usr/bin/env python3
"""
Prices and Exchange Rates

A Price states that one amount is worth another ("$300 = 1 BTC"). An
ExchangeRate is the quoted form: one whole unit of the base currency is worth
``rate`` units of the quote currency. Both can be handed to Money.convert,
which converts exactly through Rational arithmetic.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from ..core.currencies import Currency, lookup
from ..core.errors import DivisionError, ErrorCode, ExchangeRateError, InvalidInputError, PrecisionLossError
from ..core.fixed_point import ScaledDecimal
from ..core.json_utils import parse_json
from ..core.rational import Rational
from ..core.rounding import RoundingMode
from .money import Money, parse_percentage

RATE_MAX_BITS = 256

Scalar = int | ScaledDecimal | Rational | str


def _scalar(value: Scalar) -> Rational:
    if isinstance(value, str):
        return Rational.parse(value.strip())
    return Rational.coerce(value)


def _to_rate(value: Rational) -> ScaledDecimal:
    """Exact when the value terminates, otherwise rounded into the rate bit budget."""
    try:
        return value.to_fixed_point()
    except PrecisionLossError:
        return value.to_fixed_point(max_bits=RATE_MAX_BITS, rounding_mode=RoundingMode.HALF_EXPAND)


@dataclass(frozen=True)
class Price:
    """
    Two amounts of equal worth, optionally stamped with the time observed.

    Example:
        >>> price = Price((Money.parse("$300"), Money.parse("1 BTC")))
        >>> str(Money.parse("$100").convert(price).amount)
        '1/3'
    """

    amounts: tuple[Money, Money]
    time: datetime | None = None

    def __post_init__(self) -> None:
        if len(self.amounts) != 2 or not all(isinstance(a, Money) for a in self.amounts):
            raise InvalidInputError("Price requires exactly two Money amounts")
        object.__setattr__(self, "amounts", tuple(self.amounts))

    @property
    def currencies(self) -> tuple[Currency, Currency]:
        return self.amounts[0].currency, self.amounts[1].currency

    def as_pair(self) -> tuple[Money, Money]:
        return self.amounts

    def invert(self) -> "Price":
        """Swap the two sides."""
        return Price((self.amounts[1], self.amounts[0]), self.time)

    def as_ratio(self) -> Rational:
        """Units of the second currency per unit of the first."""
        first = Rational.coerce(self.amounts[0].amount)
        second = Rational.coerce(self.amounts[1].amount)
        if first.is_zero():
            raise DivisionError("Price has a zero first amount", divisor="0")
        return second.divide(first).simplify()

    def multiply(self, factor: Scalar) -> "Price":
        """Scale the first amount exactly, keeping the second unchanged."""
        first, second = self.amounts
        scaled = Rational.coerce(first.amount).multiply(_scalar(factor)).simplify()
        return Price((Money(first.currency, scaled), second), self.time)

    def divide(self, divisor: Scalar) -> "Price":
        """
        Divide the first amount exactly.

        Raises:
            DivisionError: If divisor is zero
        """
        value = _scalar(divisor)
        if value.is_zero():
            raise DivisionError("Cannot divide by zero", divisor=str(divisor))
        return self.multiply(value.invert())

    def __str__(self) -> str:
        return f"{self.amounts[0]} = {self.amounts[1]}"


@dataclass(frozen=True)
class ExchangeRateSource:
    """Where a rate came from."""

    name: str
    priority: int = 1
    reliability: float = 1.0

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "priority": self.priority, "reliability": self.reliability}


@dataclass(frozen=True)
class ExchangeRate:
    """
    One whole unit of ``base`` is worth ``rate`` units of ``quote``.

    Attributes:
        base: Currency of the "1 unit" side
        quote: Currency the rate is expressed in
        rate: Quote units per base unit (positive)
        timestamp: When the rate was observed
        source: Optional provenance

    Example:
        >>> rate = ExchangeRate.from_strings("USD", "EUR", "0.92")
        >>> str(rate.convert(Money.parse("$100")).round())
        '92.00 EUR'
    """

    base: Currency
    quote: Currency
    rate: ScaledDecimal
    timestamp: datetime | None = None
    source: ExchangeRateSource | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.rate, ScaledDecimal):
            raise ExchangeRateError(f"Exchange rate must be a ScaledDecimal, got {type(self.rate).__name__}")
        if not self.rate.is_positive():
            raise ExchangeRateError(
                f"Exchange rate must be positive, got {self.rate}",
                suggestion="Quote rates as the positive number of quote units per base unit.",
            )

    @classmethod
    def from_strings(
        cls,
        base: str,
        quote: str,
        rate: str,
        timestamp: datetime | None = None,
        source: ExchangeRateSource | None = None,
    ) -> "ExchangeRate":
        """
        Build a rate from currency codes and a decimal string.

        Example:
            ExchangeRate.from_strings("BTC", "USD", "50000")
        """
        return cls(lookup(base), lookup(quote), ScaledDecimal.from_decimal_string(rate.strip()), timestamp, source)

    def invert(self) -> "ExchangeRate":
        """
        Swap base and quote.

        1/rate rarely terminates, so the inverse is rounded (HALF_EXPAND) to
        the most precise value that fits a 256-bit budget.
        """
        inverted = Rational(1).divide(Rational.from_scaled_decimal(self.rate))
        rate = inverted.to_fixed_point(max_bits=RATE_MAX_BITS, rounding_mode=RoundingMode.HALF_EXPAND)
        return ExchangeRate(self.quote, self.base, rate, self.timestamp, self.source)

    def as_price(self) -> Price:
        return Price((Money(self.base, ScaledDecimal(1)), Money(self.quote, self.rate)), self.timestamp)

    def as_pair(self) -> tuple[Money, Money]:
        return self.as_price().as_pair()

    def convert(self, money: Money) -> Money:
        """Convert money in either currency of the pair (see Money.convert)."""
        return money.convert(self)

    @property
    def pair(self) -> str:
        return f"{self.base.identifier}/{self.quote.identifier}"

    def multiply(self, other: "Scalar | ExchangeRate") -> "ExchangeRate":
        """
        Scale the rate by a number, or chain it with another rate.

        Chaining A/B with B/C gives A/C (and B/C with A/B gives A/C too). The
        product is exact whenever it terminates. A chained rate carries the
        older of the two timestamps and no source.

        Raises:
            ExchangeRateError: If the two rates share no currency to chain
                through, or the scaled rate is not positive

        Examples:
            usd_eur.multiply("2") -> 1 USD = 1.84 EUR
            usd_eur.multiply(eur_gbp) -> 1 USD = 0.7912 GBP
        """
        if not isinstance(other, ExchangeRate):
            product = Rational.from_scaled_decimal(self.rate).multiply(_scalar(other))
            return ExchangeRate(self.base, self.quote, _to_rate(product), self.timestamp, self.source)

        if self.quote.same_asset(other.base):
            base, quote = self.base, other.quote
        elif other.quote.same_asset(self.base):
            base, quote = other.base, self.quote
        else:
            raise ExchangeRateError(
                f"Cannot chain exchange rates {self.pair} and {other.pair}",
                code=ErrorCode.EXCHANGE_RATE_MISMATCH,
                suggestion="Chain rates whose quote and base currencies line up, e.g. USD/EUR with EUR/GBP.",
            )
        product = Rational.from_scaled_decimal(self.rate).multiply(Rational.from_scaled_decimal(other.rate))
        stamps = [t for t in (self.timestamp, other.timestamp) if t is not None]
        return ExchangeRate(base, quote, _to_rate(product), min(stamps) if stamps else None)

    def spread(self, spread: Scalar) -> "SpreadQuote":
        """
        Bid and ask rates around this one.

        The spread is the full bid/ask width as a fraction of the rate
        ("0.02", "2%"); half of it is taken off for the bid and added for the
        ask.

        Raises:
            InvalidInputError: If the spread is negative
            ExchangeRateError: If the spread is wide enough to make the bid non-positive

        Example:
            usd_eur.spread("2%") -> bid 0.9108, ask 0.9292, mid 0.92
        """
        width = parse_percentage(spread) if isinstance(spread, str) else None
        half = _scalar(width if width is not None else spread).divide(Rational(2))
        if half.is_negative():
            raise InvalidInputError(f"Spread must not be negative, got {spread!r}", code=ErrorCode.INVALID_RANGE)

        rate = Rational.from_scaled_decimal(self.rate)
        bid = rate.multiply(Rational(1).subtract(half))
        ask = rate.multiply(Rational(1).add(half))
        return SpreadQuote(
            bid=ExchangeRate(self.base, self.quote, _to_rate(bid), self.timestamp, self.source),
            ask=ExchangeRate(self.base, self.quote, _to_rate(ask), self.timestamp, self.source),
            mid=self,
        )

    @classmethod
    def average(cls, rates: list["ExchangeRate"]) -> "ExchangeRate":
        """
        Mean of several quotes for the same currency pair.

        Rates quoted the other way round are inverted first. The result is
        stamped with the most recent timestamp and gets a source naming the
        inputs, with their mean reliability.

        Raises:
            InvalidInputError: If rates is empty
            ExchangeRateError: If the rates do not all cover the same two currencies
        """
        if not rates:
            raise InvalidInputError("Cannot average an empty list of exchange rates", code=ErrorCode.EMPTY_ARRAY)

        first = rates[0]
        aligned = []
        for rate in rates:
            if rate.base.same_asset(first.base) and rate.quote.same_asset(first.quote):
                aligned.append(rate)
            elif rate.base.same_asset(first.quote) and rate.quote.same_asset(first.base):
                aligned.append(rate.invert())
            else:
                raise ExchangeRateError(
                    f"Incompatible currency pairs: all rates must use the same two currencies "
                    f"({first.pair} vs {rate.pair})",
                    code=ErrorCode.EXCHANGE_RATE_MISMATCH,
                )

        total = Rational(0)
        for rate in aligned:
            total = total.add(Rational.from_scaled_decimal(rate.rate))
        mean = total.divide(Rational(len(aligned)))

        stamps = [r.timestamp for r in aligned if r.timestamp is not None]
        names = [r.source.name if r.source else "Unknown" for r in aligned]
        reliabilities = [r.source.reliability if r.source else 1.0 for r in aligned]
        if len(aligned) == 1:
            name = "Average of 1 source"
        elif all(n == "Unknown" for n in names):
            name = f"Average of {len(aligned)} sources"
        else:
            name = f"Average of {', '.join(names)}"

        return cls(
            first.base,
            first.quote,
            _to_rate(mean),
            max(stamps) if stamps else None,
            ExchangeRateSource(name=name, priority=1, reliability=sum(reliabilities) / len(reliabilities)),
        )

    def get_age(self, now: datetime | None = None) -> timedelta:
        """Time since the rate was observed (zero when it has no timestamp)."""
        if self.timestamp is None:
            return timedelta(0)
        current = now or datetime.now(self.timestamp.tzinfo)
        return current - self.timestamp

    def is_stale(self, max_age: timedelta, now: datetime | None = None) -> bool:
        """True when the rate is older than ``max_age``. Rates without a timestamp never go stale."""
        if self.timestamp is None:
            return False
        return self.get_age(now) > max_age

    def to_json(self) -> dict[str, Any]:
        return {
            "base": self.base.to_dict(),
            "quote": self.quote.to_dict(),
            "rate": self.rate.to_json(),
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "source": self.source.to_dict() if self.source else None,
        }

    @classmethod
    def from_json(cls, data: Any) -> "ExchangeRate":
        """
        Deserialize ``to_json`` output (or its JSON text).

        Currencies may be given as codes or full objects; the rate as a
        decimal string or a legacy {"amount", "decimals"} object.

        Raises:
            InvalidInputError: If the structure is not recognised
            ExchangeRateError: If the rate is not positive
        """
        if isinstance(data, str):
            try:
                data = parse_json(data)
            except ValueError as e:
                raise InvalidInputError("Invalid JSON input", code=ErrorCode.INVALID_JSON, cause=e) from e
        if not isinstance(data, dict) or not {"base", "quote", "rate"} <= data.keys():
            raise InvalidInputError(
                "Invalid exchange rate JSON: expected 'base', 'quote' and 'rate'",
                code=ErrorCode.INVALID_JSON,
            )

        def currency(value: Any) -> Currency:
            if isinstance(value, str):
                return lookup(value)
            if isinstance(value, dict):
                return Currency.from_dict(value)
            raise InvalidInputError(f"Invalid currency in JSON: {value!r}", code=ErrorCode.INVALID_JSON)

        timestamp = None
        if data.get("timestamp"):
            try:
                timestamp = datetime.fromisoformat(str(data["timestamp"]))
            except ValueError as e:
                raise InvalidInputError(
                    f"Invalid timestamp: {data['timestamp']!r}", code=ErrorCode.INVALID_JSON, cause=e
                ) from e

        source = None
        if isinstance(data.get("source"), dict):
            raw = data["source"]
            source = ExchangeRateSource(
                name=str(raw.get("name", "")),
                priority=int(raw.get("priority", 1)),
                reliability=float(raw.get("reliability", 1.0)),
            )

        return cls(
            currency(data["base"]),
            currency(data["quote"]),
            ScaledDecimal.from_json(data["rate"]),
            timestamp,
            source,
        )

    def __str__(self) -> str:
        return f"1 {self.base.identifier} = {self.rate} {self.quote.identifier}"


@dataclass(frozen=True)
class SpreadQuote:
    """Bid, ask and mid rates produced by ExchangeRate.spread."""

    bid: ExchangeRate
    ask: ExchangeRate
    mid: ExchangeRate
