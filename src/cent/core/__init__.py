"""
Core Numeric Kernel

Exact arithmetic shared by every money operation.

This package provides:
- ScaledDecimal: integer amount at a base-10 scale
- Rational: exact fraction for non-terminating results
- Rounding modes applied to integer ratios
- Currency metadata and lookup tables
- Error taxonomy and environment-based configuration
"""

from .config import (
    Config,
    Environment,
    NumberInputMode,
    get_config,
    is_development,
    is_production,
    is_test,
    override_config,
    reload_config,
)
from .currencies import (
    CURRENCIES,
    Currency,
    find_currency,
    lookup,
    sub_unit_info,
)
from .decimal_strings import DecimalString, RationalString, is_decimal_string, is_rational_string
from .errors import (
    CentError,
    CurrencyMismatchError,
    DivisionError,
    ErrorCode,
    ExchangeRateError,
    InvalidInputError,
    ParseError,
    PrecisionLossError,
)
from .fixed_point import ScaledDecimal
from .rational import Rational
from .rounding import RoundingMode, apply_rounding

__all__ = [
    "CURRENCIES",
    "CentError",
    # Configuration
    "Config",
    "Currency",
    "CurrencyMismatchError",
    "DecimalString",
    "DivisionError",
    "Environment",
    "ErrorCode",
    "ExchangeRateError",
    "InvalidInputError",
    "NumberInputMode",
    "ParseError",
    "PrecisionLossError",
    "Rational",
    "RationalString",
    "RoundingMode",
    # Numeric types
    "ScaledDecimal",
    "apply_rounding",
    "find_currency",
    "get_config",
    "is_decimal_string",
    "is_development",
    "is_production",
    "is_rational_string",
    "is_test",
    "lookup",
    "override_config",
    "reload_config",
    "sub_unit_info",
]
