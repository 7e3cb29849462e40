"""
cent - Exact Money Arithmetic

Arbitrary-precision money values that never lose a fraction of a unit
silently. Amounts are scaled integers (ScaledDecimal) or exact fractions
(Rational); rounding only happens when a RoundingMode is supplied.

Key Features:
- Parsing of symbols, ISO codes, EU number formats and crypto sub-units
- Allocation and distribution that preserve the total exactly
- Exact currency conversion through Rational arithmetic
- Structured errors with codes and suggestions

Packages:
- core: Numeric kernel, rounding, currencies, errors, configuration
- money: Money value type, string parser, prices, exchange rates and ranges
- cli: Command-line interface

Example Usage:
    from cent import Money, RoundingMode

    total = Money.parse("$100.00")
    shares = total.allocate([1, 1, 1])
    tax = total.percent_of("8.25%", RoundingMode.HALF_UP)
"""

__version__ = "0.1.0"
__author__ = "Karl Davis"

# Export the numeric kernel
from .core.config import Environment, NumberInputMode, get_config
from .core.currencies import BTC, ETH, EUR, GBP, JPY, SOL, USD, Currency
from .core.errors import (
    CentError,
    CurrencyMismatchError,
    DivisionError,
    ErrorCode,
    ExchangeRateError,
    InvalidInputError,
    ParseError,
    PrecisionLossError,
)
from .core.fixed_point import ScaledDecimal
from .core.rational import Rational
from .core.rounding import RoundingMode

# Export money types
from .money.money import Money, avg_money, sum_money
from .money.parsing import parse_money_string
from .money.price_range import PriceRange
from .money.prices import ExchangeRate, Price

__all__ = [
    # Numeric kernel
    "ScaledDecimal",
    "Rational",
    "RoundingMode",

    # Money
    "Money",
    "Price",
    "ExchangeRate",
    "PriceRange",
    "parse_money_string",
    "sum_money",
    "avg_money",

    # Currencies
    "Currency",
    "USD",
    "EUR",
    "GBP",
    "JPY",
    "BTC",
    "ETH",
    "SOL",

    # Errors
    "CentError",
    "ErrorCode",
    "ParseError",
    "CurrencyMismatchError",
    "DivisionError",
    "PrecisionLossError",
    "InvalidInputError",
    "ExchangeRateError",

    # Configuration
    "get_config",
    "Environment",
    "NumberInputMode",
]
