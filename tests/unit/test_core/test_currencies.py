#!/usr/bin/env python3
"""Tests for currency metadata and lookup tables."""

import pytest

from cent.core.currencies import (
    BTC,
    CURRENCIES,
    ETH,
    EUR,
    GBP,
    JPY,
    SOL,
    USD,
    Currency,
    find_currency,
    fractional_unit_info,
    lookup,
    primary_currency_for,
    sub_unit_info,
    symbols_longest_first,
)
from cent.core.errors import ErrorCode, InvalidInputError, ParseError


class TestCurrencyMetadata:
    """Test built-in currency definitions."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "currency,decimals",
        [(USD, 2), (EUR, 2), (GBP, 2), (JPY, 0), (BTC, 8), (ETH, 18), (SOL, 9)],
        ids=["USD", "EUR", "GBP", "JPY", "BTC", "ETH", "SOL"],
    )
    def test_canonical_decimals(self, currency, decimals):
        assert currency.decimals == decimals

    @pytest.mark.currency
    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            CURRENCIES["XXX"] = USD

    @pytest.mark.currency
    def test_crypto_is_not_iso4217(self):
        assert USD.iso4217_support
        assert not BTC.iso4217_support

    @pytest.mark.currency
    def test_fractional_unit_names(self):
        assert BTC.fractional_unit_names()[:2] == ["satoshi", "sat"]
        assert "gwei" in ETH.fractional_unit_names()
        assert USD.fractional_unit_names() == ["cent"]

    @pytest.mark.currency
    def test_same_asset_is_structural(self):
        copy = Currency(code="usd", name="Other name", decimals=2, symbol="$")
        assert USD.same_asset(copy)
        assert not USD.same_asset(EUR)

    @pytest.mark.currency
    def test_dict_round_trip(self):
        assert Currency.from_dict(BTC.to_dict()) == BTC
        assert Currency.from_dict(USD.to_dict()) == USD

    @pytest.mark.currency
    def test_from_dict_missing_keys(self):
        with pytest.raises(InvalidInputError) as exc_info:
            Currency.from_dict({"code": "USD"})
        assert exc_info.value.code == ErrorCode.INVALID_JSON


class TestCurrencyLookup:
    """Test code, symbol and unit lookups."""

    @pytest.mark.currency
    def test_find_is_case_insensitive(self):
        assert find_currency("usd") is USD
        assert find_currency(" btc ") is BTC
        assert find_currency("XYZ") is None
        assert find_currency("") is None

    @pytest.mark.currency
    def test_lookup_unknown_code(self):
        with pytest.raises(ParseError) as exc_info:
            lookup("XYZ")
        assert exc_info.value.code == ErrorCode.UNKNOWN_CURRENCY

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "symbol,code",
        [("$", "USD"), ("€", "EUR"), ("£", "GBP"), ("¥", "JPY"), ("₿", "BTC"), ("R$", "BRL")],
    )
    def test_primary_symbols(self, symbol, code):
        assert primary_currency_for(symbol).code == code

    @pytest.mark.currency
    def test_longer_symbols_come_first(self):
        ordered = symbols_longest_first()
        assert ordered.index("US$") < ordered.index("$")
        assert ordered.index("R$") < ordered.index("R")

    @pytest.mark.currency
    def test_fractional_unit_symbols(self):
        assert fractional_unit_info("¢").currency is USD
        assert fractional_unit_info("§").decimals == 8
        assert fractional_unit_info("p").currency is GBP
        assert fractional_unit_info("$") is None

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "unit,currency,decimals",
        [("sat", BTC, 8), ("MSAT", BTC, 11), ("gwei", ETH, 9), ("wei", ETH, 18), ("lamport", SOL, 9), ("cents", USD, 2)],
    )
    def test_sub_units(self, unit, currency, decimals):
        info = sub_unit_info(unit)
        assert info.currency is currency
        assert info.decimals == decimals

    @pytest.mark.currency
    def test_unknown_sub_unit(self):
        assert sub_unit_info("furlong") is None
