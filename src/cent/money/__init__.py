"""
Money Package

Money value type built on the core kernel, the monetary string parser,
price / exchange-rate conversion and price ranges.
"""

from .money import Money, avg_money, parse_percentage, sum_money
from .parsing import NumberFormat, ParsedMoney, detect_number_format, parse_money_string, parse_number
from .price_range import PriceRange
from .prices import ExchangeRate, ExchangeRateSource, Price, SpreadQuote

__all__ = [
    "ExchangeRate",
    "ExchangeRateSource",
    "Money",
    "NumberFormat",
    "ParsedMoney",
    "Price",
    "PriceRange",
    "SpreadQuote",
    "avg_money",
    "detect_number_format",
    "parse_money_string",
    "parse_number",
    "parse_percentage",
    "sum_money",
]
