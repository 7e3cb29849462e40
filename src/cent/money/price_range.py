#!/usr/bin/env python3
"""
Price Ranges

An inclusive range of Money in one currency ("$50 - $100"), with
containment and overlap queries, set operations, bucketing and parsing of
range strings.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any

from ..core.currencies import Currency
from ..core.errors import CurrencyMismatchError, ErrorCode, InvalidInputError, ParseError
from ..core.json_utils import parse_json
from .money import Money
from .prices import ExchangeRate, Price

logger = logging.getLogger(__name__)

# Candidate split points: "-", en dash or the word "to", with optional spaces
RANGE_SEPARATOR = re.compile(r"\s*(?:-|–|\bto\b)\s*", re.IGNORECASE)

FORMAT_STYLES = ("range", "from", "up_to", "to", "between")


def _money(value: "Money | str") -> Money:
    if isinstance(value, Money):
        return value
    if isinstance(value, str):
        return Money.parse(value)
    raise InvalidInputError(f"Expected Money or a money string, got {type(value).__name__}")


@dataclass(frozen=True, eq=False)
class PriceRange:
    """
    Inclusive range [minimum, maximum] of one currency.

    Example:
        >>> r = PriceRange.parse("$50 - $100")
        >>> r.contains("$75")
        True
        >>> [str(part) for part in r.split(2)]
        ['50.00 USD - 75.00 USD', '75.00 USD - 100.00 USD']
    """

    minimum: Money
    maximum: Money

    def __post_init__(self) -> None:
        if not isinstance(self.minimum, Money) or not isinstance(self.maximum, Money):
            raise InvalidInputError("PriceRange bounds must be Money")
        if not self.minimum.currency.same_asset(self.maximum.currency):
            raise CurrencyMismatchError(
                expected=self.minimum.currency.identifier,
                actual=self.maximum.currency.identifier,
                operation="create range",
            )
        if self.minimum.compare(self.maximum) > 0:
            raise InvalidInputError(
                "Invalid range: maximum must be greater than or equal to minimum",
                code=ErrorCode.INVALID_RANGE,
                suggestion=f"Swap the bounds: {self.maximum} - {self.minimum}",
            )

    # Construction

    @classmethod
    def between(cls, minimum: "Money | str", maximum: "Money | str") -> "PriceRange":
        return cls(_money(minimum), _money(maximum))

    @classmethod
    def under(cls, maximum: "Money | str") -> "PriceRange":
        """From zero up to ``maximum``."""
        high = _money(maximum)
        return cls(Money.zero(high.currency), high)

    @classmethod
    def around(cls, base: "Money | str", percentage: str | int) -> "PriceRange":
        """
        ``base`` plus and minus a percentage of itself.

        Example:
            PriceRange.around("$100", "10%") -> 90.00 USD - 110.00 USD
        """
        center = _money(base)
        margin = center.percent_of(percentage).absolute()
        return cls(center.subtract(margin), center.add(margin))

    @classmethod
    def create_buckets(cls, minimum: "Money | str", maximum: "Money | str", count: int) -> list["PriceRange"]:
        """Split [minimum, maximum] into ``count`` consecutive ranges."""
        return cls.between(minimum, maximum).split(count)

    @classmethod
    def parse(cls, text: str) -> "PriceRange":
        """
        Parse "$50 - $100", "$50-100", "€10 to €20" or "USD 5 - USD 9".

        A maximum without a symbol or code takes the minimum's currency.

        Raises:
            ParseError: If no split of the text yields two money values
        """
        if not isinstance(text, str) or not text.strip():
            raise ParseError("Empty price range", input=text if isinstance(text, str) else None)

        cleaned = text.strip()
        for match in RANGE_SEPARATOR.finditer(cleaned):
            if match.start() == 0:
                continue
            left, right = cleaned[: match.start()], cleaned[match.end() :]
            if not right:
                continue
            try:
                low = Money.parse(left)
            except ParseError:
                continue
            try:
                high = Money.parse(right)
            except ParseError:
                high = Money.parse(f"{low.currency.code} {right}")
            logger.debug("Parsed range %r as %s - %s", text, low, high)
            return cls(low, high)

        raise ParseError(
            f"Invalid price range: {text!r}",
            input=text,
            code=ErrorCode.INVALID_MONEY_STRING,
            example="PriceRange.parse('$50 - $100')",
        )

    # Properties

    @property
    def currency(self) -> Currency:
        return self.minimum.currency

    @property
    def span(self) -> Money:
        return self.maximum.subtract(self.minimum)

    @property
    def midpoint(self) -> Money:
        return self.minimum.add(self.maximum).divide(2)

    @property
    def is_empty(self) -> bool:
        """True when both bounds are the same value."""
        return self.minimum.equals(self.maximum)

    # Queries

    def contains(self, price: "Money | str") -> bool:
        """
        Whether ``price`` lies inside the range, bounds included.

        Raises:
            CurrencyMismatchError: If price is in another currency
        """
        return self.minimum.compare(price) <= 0 and self.maximum.compare(price) >= 0

    def is_above(self, price: "Money | str") -> bool:
        """The whole range lies above ``price``."""
        return self.minimum.compare(price) > 0

    def is_below(self, price: "Money | str") -> bool:
        """The whole range lies below ``price``."""
        return self.maximum.compare(price) < 0

    def overlaps(self, other: "PriceRange") -> bool:
        return self.minimum.compare(other.maximum) <= 0 and other.minimum.compare(self.maximum) <= 0

    # Set operations

    def intersect(self, other: "PriceRange") -> "PriceRange | None":
        """Common part of both ranges, or None when they do not overlap."""
        if not self.overlaps(other):
            return None
        return PriceRange(self.minimum.max(other.minimum), self.maximum.min(other.maximum))

    def union(self, other: "PriceRange") -> "PriceRange":
        """Smallest range covering both (including any gap between them)."""
        return PriceRange(self.minimum.min(other.minimum), self.maximum.max(other.maximum))

    def split(self, parts: int) -> list["PriceRange"]:
        """
        Divide into ``parts`` consecutive ranges whose spans differ by at most one unit.

        Raises:
            InvalidInputError: If parts is not a positive integer
        """
        if isinstance(parts, bool) or not isinstance(parts, int) or parts <= 0:
            raise InvalidInputError(
                f"Parts must be a positive integer, got {parts!r}",
                example="price_range.split(4)",
            )

        shares = self.span.distribute(parts)
        ranges = []
        start = self.minimum
        for index, share in enumerate(shares):
            end = self.maximum if index == parts - 1 else start.add(share)
            ranges.append(PriceRange(start, end))
            start = end
        return ranges

    def convert(self, rate: "Price | ExchangeRate") -> "PriceRange":
        """Convert both bounds exactly (see Money.convert)."""
        return PriceRange(self.minimum.convert(rate), self.maximum.convert(rate))

    # Equality and output

    def equals(self, other: "PriceRange") -> bool:
        return self.minimum.equals(other.minimum) and self.maximum.equals(other.maximum)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PriceRange):
            return NotImplemented
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self.minimum, self.maximum))

    def format(self, style: str = "range") -> str:
        """
        Render the range.

        Styles: "range" (50.00 USD - 100.00 USD), "from" (From 50.00 USD),
        "up_to" (Up to 100.00 USD), "to" (50.00 USD to 100.00 USD) and
        "between" (Between 50.00 USD and 100.00 USD). An empty range prints
        its single value.
        """
        if style not in FORMAT_STYLES:
            raise InvalidInputError(
                f"Unknown range format style: {style!r}",
                suggestion=f"Use one of: {', '.join(FORMAT_STYLES)}",
            )
        if self.is_empty:
            return str(self.minimum)
        if style == "from":
            return f"From {self.minimum}"
        if style == "up_to":
            return f"Up to {self.maximum}"
        if style == "to":
            return f"{self.minimum} to {self.maximum}"
        if style == "between":
            return f"Between {self.minimum} and {self.maximum}"
        return f"{self.minimum} - {self.maximum}"

    def __str__(self) -> str:
        return self.format()

    def to_json(self) -> dict[str, Any]:
        return {"min": self.minimum.to_json(), "max": self.maximum.to_json()}

    @classmethod
    def from_json(cls, data: Any) -> "PriceRange":
        """
        Deserialize ``to_json`` output (or its JSON text).

        Raises:
            InvalidInputError: If "min" or "max" is missing
        """
        if isinstance(data, str):
            try:
                data = parse_json(data)
            except ValueError as e:
                raise InvalidInputError("Invalid JSON input", code=ErrorCode.INVALID_JSON, cause=e) from e
        if not isinstance(data, dict) or not {"min", "max"} <= data.keys():
            raise InvalidInputError(
                "Invalid price range JSON: expected 'min' and 'max'",
                code=ErrorCode.INVALID_JSON,
            )
        return cls(Money.from_json(data["min"]), Money.from_json(data["max"]))


__all__ = ["PriceRange"]
