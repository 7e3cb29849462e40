#!/usr/bin/env python3
"""Tests for price ranges."""

import pytest

from cent.core.currencies import EUR, USD
from cent.core.errors import CurrencyMismatchError, ErrorCode, InvalidInputError, ParseError
from cent.money.money import Money
from cent.money.price_range import PriceRange
from cent.money.prices import ExchangeRate


@pytest.fixture
def fifty_to_hundred():
    return PriceRange.between("$50", "$100")


class TestPriceRangeConstruction:
    """Test building ranges."""

    @pytest.mark.currency
    def test_between(self, fifty_to_hundred):
        assert fifty_to_hundred.currency is USD
        assert fifty_to_hundred.minimum == Money.parse("$50")
        assert fifty_to_hundred.maximum == Money.parse("$100")

    @pytest.mark.currency
    def test_inverted_bounds_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            PriceRange.between("$100", "$50")
        assert exc_info.value.code == ErrorCode.INVALID_RANGE
        assert "maximum must be greater than or equal to minimum" in exc_info.value.message

    @pytest.mark.currency
    def test_mixed_currencies_rejected(self):
        with pytest.raises(CurrencyMismatchError):
            PriceRange.between("$50", "€100")

    @pytest.mark.currency
    def test_under(self):
        r = PriceRange.under("€20")
        assert r.minimum == Money.zero("EUR")
        assert r.maximum == Money.parse("€20")

    @pytest.mark.currency
    def test_around(self):
        r = PriceRange.around("$100", "10%")
        assert r == PriceRange.between("$90", "$110")

    @pytest.mark.currency
    def test_create_buckets(self):
        buckets = PriceRange.create_buckets("$0", "$100", 4)
        assert [str(b) for b in buckets] == [
            "0.00 USD - 25.00 USD",
            "25.00 USD - 50.00 USD",
            "50.00 USD - 75.00 USD",
            "75.00 USD - 100.00 USD",
        ]


class TestPriceRangeParsing:
    """Test parsing range strings."""

    @pytest.mark.parser
    @pytest.mark.parametrize(
        "text,low,high",
        [
            ("$50 - $100", "$50", "$100"),
            ("$50-100", "$50", "$100"),
            ("€10 to €20", "€10", "€20"),
            ("USD 5 - USD 9", "$5", "$9"),
            ("-$5 - $10", "-$5", "$10"),
            ("$1,000 – $2,500.50", "$1000", "$2500.50"),
        ],
        ids=["spaced", "inherited-symbol", "to", "codes", "negative-minimum", "en-dash"],
    )
    def test_parse(self, text, low, high):
        assert PriceRange.parse(text) == PriceRange.between(low, high)

    @pytest.mark.parser
    @pytest.mark.parametrize("text", ["", "$50", "cheap - expensive"], ids=["empty", "single", "words"])
    def test_parse_rejects(self, text):
        with pytest.raises(ParseError):
            PriceRange.parse(text)


class TestPriceRangeQueries:
    """Test derived values and queries."""

    @pytest.mark.currency
    def test_span_and_midpoint(self, fifty_to_hundred):
        assert fifty_to_hundred.span == Money.parse("$50")
        assert fifty_to_hundred.midpoint == Money.parse("$75")
        assert PriceRange.between("$0.01", "$0.02").midpoint == Money.of("0.015", "USD")

    @pytest.mark.currency
    def test_is_empty(self, fifty_to_hundred):
        assert not fifty_to_hundred.is_empty
        assert PriceRange.between("$5", "$5.00").is_empty

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "price,contains,above,below",
        [
            ("$49.99", False, True, False),
            ("$50", True, False, False),
            ("$75", True, False, False),
            ("$100", True, False, False),
            ("$100.01", False, False, True),
            ("75", True, False, False),
        ],
        ids=["under", "lower-bound", "inside", "upper-bound", "over", "decimal-string"],
    )
    def test_position_queries(self, fifty_to_hundred, price, contains, above, below):
        assert fifty_to_hundred.contains(price) is contains
        assert fifty_to_hundred.is_above(price) is above
        assert fifty_to_hundred.is_below(price) is below

    @pytest.mark.currency
    def test_contains_rejects_other_currency(self, fifty_to_hundred):
        with pytest.raises(CurrencyMismatchError):
            fifty_to_hundred.contains("€75")


class TestPriceRangeOperations:
    """Test set operations, splitting and conversion."""

    @pytest.mark.currency
    def test_overlap_and_intersect(self, fifty_to_hundred):
        other = PriceRange.between("$80", "$120")
        assert fifty_to_hundred.overlaps(other)
        assert fifty_to_hundred.intersect(other) == PriceRange.between("$80", "$100")

    @pytest.mark.currency
    def test_touching_ranges_overlap(self, fifty_to_hundred):
        touching = PriceRange.between("$100", "$150")
        assert fifty_to_hundred.overlaps(touching)
        assert fifty_to_hundred.intersect(touching).is_empty

    @pytest.mark.currency
    def test_disjoint_ranges(self, fifty_to_hundred):
        other = PriceRange.between("$150", "$200")
        assert not fifty_to_hundred.overlaps(other)
        assert fifty_to_hundred.intersect(other) is None
        assert fifty_to_hundred.union(other) == PriceRange.between("$50", "$200")

    @pytest.mark.currency
    def test_split_preserves_bounds(self):
        parts = PriceRange.between("$0", "$100").split(3)
        assert [str(p) for p in parts] == [
            "0.00 USD - 33.34 USD",
            "33.34 USD - 66.67 USD",
            "66.67 USD - 100.00 USD",
        ]

    @pytest.mark.currency
    @pytest.mark.parametrize("parts", [0, -1, 1.5, True], ids=["zero", "negative", "float", "bool"])
    def test_split_rejects_bad_parts(self, fifty_to_hundred, parts):
        with pytest.raises(InvalidInputError):
            fifty_to_hundred.split(parts)

    @pytest.mark.currency
    def test_convert(self, fifty_to_hundred):
        converted = fifty_to_hundred.convert(ExchangeRate.from_strings("USD", "EUR", "0.92"))
        assert converted.currency is EUR
        assert converted == PriceRange.between("€46", "€92")


class TestPriceRangeOutput:
    """Test formatting and JSON."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "style,expected",
        [
            ("range", "50.00 USD - 100.00 USD"),
            ("from", "From 50.00 USD"),
            ("up_to", "Up to 100.00 USD"),
            ("to", "50.00 USD to 100.00 USD"),
            ("between", "Between 50.00 USD and 100.00 USD"),
        ],
        ids=["range", "from", "up-to", "to", "between"],
    )
    def test_format(self, fifty_to_hundred, style, expected):
        assert fifty_to_hundred.format(style) == expected

    @pytest.mark.currency
    def test_single_value_format(self):
        assert str(PriceRange.between("$5", "$5")) == "5.00 USD"

    @pytest.mark.currency
    def test_unknown_style(self, fifty_to_hundred):
        with pytest.raises(InvalidInputError):
            fifty_to_hundred.format("compact")

    @pytest.mark.currency
    def test_json_round_trip(self, fifty_to_hundred):
        data = fifty_to_hundred.to_json()
        assert set(data) == {"min", "max"}
        assert PriceRange.from_json(data) == fifty_to_hundred

    @pytest.mark.currency
    def test_from_json_rejects_missing_bound(self):
        with pytest.raises(InvalidInputError) as exc_info:
            PriceRange.from_json('{"min": {"currency": "USD", "amount": "1.00"}}')
        assert exc_info.value.code == ErrorCode.INVALID_JSON
