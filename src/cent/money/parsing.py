#!/usr/bin/env python3
"""
Monetary String Parsing

Turns free-form monetary text into a (currency, ScaledDecimal) pair.

Strategies are tried in priority order; each either returns a result or
defers to the next one:

1. Crypto sub-unit:      "1000 sat", "100 gwei", "5 bits"
2. Currency code:        "USD 100", "1.234,56 EUR", "jpy 100"
3. Fractional symbol:    "¢50", "50¢", "75p", "§1000"
4. Currency symbol:      "$100", "100 €", "R$ 10", "-£5.50", "$1.23E+5"

Number formats:
- US: 1,234.56 (comma groups, dot decimal)
- EU: 1.234,56 (dot groups, comma decimal)

Nothing here ever goes through a binary float; scientific notation is
decomposed into digits and an exponent and folded into the scale.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum

from ..core.currencies import (
    BTC,
    ETH,
    Currency,
    find_currency,
    fractional_symbols_longest_first,
    fractional_unit_info,
    primary_currency_for,
    symbols_longest_first,
)
from ..core.errors import ErrorCode, ParseError
from ..core.fixed_point import ScaledDecimal
from ..core.math_utils import pow10

logger = logging.getLogger(__name__)


class NumberFormat(Enum):
    """Grouping and decimal separator convention of a numeric literal."""

    US = "US"  # 1,234.56
    EU = "EU"  # 1.234,56


@dataclass(frozen=True)
class ParsedMoney:
    """Result of parsing a monetary string."""

    currency: Currency
    amount: ScaledDecimal


# Currencies whose amounts are conventionally written 1.234,56
EU_FORMAT_CURRENCIES = frozenset({"EUR", "DKK", "NOK", "SEK"})

NEGATIVE_SIGNS = ("-", "−")

_NUMBER_CHARS = r"[0-9,. \-−]+"
SUB_UNIT_PATTERN = re.compile(rf"^({_NUMBER_CHARS})\s+([a-zA-Z]+)$")
CODE_FIRST_PATTERN = re.compile(rf"^([A-Z]{{3,4}})\s+({_NUMBER_CHARS})$", re.IGNORECASE)
CODE_LAST_PATTERN = re.compile(rf"^({_NUMBER_CHARS})\s+([A-Z]{{3,4}})$", re.IGNORECASE)
SCIENTIFIC_PATTERN = re.compile(r"^(\d*\.?\d+)[eE]([+-]?\d+)$")

_EU_GROUP_TAIL = re.compile(r"\.\d{3}$")


@dataclass(frozen=True)
class _CryptoSubUnit:
    currency: Currency
    multiplier: int
    scale: int


# Amounts written in these units are whole numbers of the unit
CRYPTO_SUB_UNITS: dict[str, _CryptoSubUnit] = {
    "sat": _CryptoSubUnit(BTC, 1, 8),
    "sats": _CryptoSubUnit(BTC, 1, 8),
    "satoshi": _CryptoSubUnit(BTC, 1, 8),
    "satoshis": _CryptoSubUnit(BTC, 1, 8),
    "bit": _CryptoSubUnit(BTC, 10, 8),
    "bits": _CryptoSubUnit(BTC, 10, 8),
    "msat": _CryptoSubUnit(BTC, 1, 12),
    "msats": _CryptoSubUnit(BTC, 1, 12),
    "millisat": _CryptoSubUnit(BTC, 1, 12),
    "millisats": _CryptoSubUnit(BTC, 1, 12),
    "millisatoshi": _CryptoSubUnit(BTC, 1, 12),
    "millisatoshis": _CryptoSubUnit(BTC, 1, 12),
    "wei": _CryptoSubUnit(ETH, 1, 18),
    "gwei": _CryptoSubUnit(ETH, 10**9, 18),
    "shannon": _CryptoSubUnit(ETH, 10**9, 18),
    "kwei": _CryptoSubUnit(ETH, 10**3, 18),
    "babbage": _CryptoSubUnit(ETH, 10**3, 18),
}


def _invalid_number(text: str) -> ParseError:
    return ParseError(
        f"Invalid number format: {text!r}",
        input=text,
        code=ErrorCode.INVALID_NUMBER_FORMAT,
        suggestion="Use 1,234.56 (US) or 1.234,56 (EU) with groups of three digits.",
    )


def _strip_negative(text: str) -> tuple[bool, str]:
    if text.startswith(NEGATIVE_SIGNS):
        return True, text[1:].strip()
    return False, text


def detect_number_format(number: str, currency_code: str | None = None) -> NumberFormat:
    """
    Decide whether a numeric literal uses US or EU separators.

    Rules:
    - Both separators present: the rightmost one is the decimal point.
    - Single separator with an EU-default currency (EUR, DKK, NOK, SEK):
      a comma is decimal; a dot followed by exactly three digits is grouping.
    - Everything else is US.

    Examples:
        detect_number_format("1.234,56") -> EU
        detect_number_format("1,234.56") -> US
        detect_number_format("1.000", "EUR") -> EU
        detect_number_format("1.000", "USD") -> US
    """
    has_comma = "," in number
    has_dot = "." in number

    if has_comma and has_dot:
        return NumberFormat.EU if number.rfind(",") > number.rfind(".") else NumberFormat.US

    if currency_code and currency_code.upper() in EU_FORMAT_CURRENCIES:
        if has_comma:
            return NumberFormat.EU
        if has_dot:
            before, _, after = number.rpartition(".")
            if len(after) == 3 and after.isdigit():
                if "." not in before or _EU_GROUP_TAIL.search(before):
                    return NumberFormat.EU

    return NumberFormat.US


def _parse_scientific(mantissa: str, exponent: str) -> ScaledDecimal:
    whole, _, fraction = mantissa.partition(".")
    digits = int((whole + fraction) or "0")
    scale = len(fraction) - int(exponent)
    if scale < 0:
        return ScaledDecimal(digits * pow10(-scale), 0)
    return ScaledDecimal(digits, scale)


def _valid_grouping(integer_part: str, group_separator: str) -> bool:
    if group_separator not in integer_part:
        return integer_part.isdigit()
    groups = integer_part.split(group_separator)
    if not (1 <= len(groups[0]) <= 3 and groups[0].isdigit()):
        return False
    return all(len(g) == 3 and g.isdigit() for g in groups[1:])


def parse_number(text: str, number_format: NumberFormat = NumberFormat.US) -> ScaledDecimal:
    """
    Parse a numeric literal in the given format into an exact ScaledDecimal.

    Accepts an optional leading "-" or "−", grouping separators in groups of
    three, and scientific notation ("1.23e-5", "1E+3").

    Args:
        text: Numeric literal without currency symbols
        number_format: Separator convention

    Returns:
        ScaledDecimal keeping every written fraction digit

    Raises:
        ParseError: If the literal is malformed or grouping is invalid

    Examples:
        parse_number("1,234.56") -> 1234.56
        parse_number("1.234,56", NumberFormat.EU) -> 1234.56
        parse_number("1.23E+5") -> 123000
        parse_number("1e-3") -> 0.001
    """
    negative, body = _strip_negative(text.strip())
    if not body:
        raise _invalid_number(text)

    scientific = SCIENTIFIC_PATTERN.match(body)
    if scientific:
        value = _parse_scientific(scientific.group(1), scientific.group(2))
        return value.negate() if negative else value

    if number_format == NumberFormat.US:
        decimal_separator, group_separator = ".", ","
    else:
        decimal_separator, group_separator = ",", "."

    parts = body.split(decimal_separator)
    if len(parts) > 2:
        raise _invalid_number(text)

    integer_part = parts[0]
    fraction_part = parts[1] if len(parts) == 2 else ""
    if len(parts) == 2 and not fraction_part.isdigit():
        raise _invalid_number(text)
    if not integer_part or not _valid_grouping(integer_part, group_separator):
        raise _invalid_number(text)

    literal = integer_part.replace(group_separator, "")
    if fraction_part:
        literal = f"{literal}.{fraction_part}"
    value = ScaledDecimal.from_decimal_string(literal)
    return value.negate() if negative else value


def _at_currency_scale(value: ScaledDecimal, currency: Currency) -> ScaledDecimal:
    return value.normalize(max(value.scale, currency.decimals))


def _try_crypto_sub_unit(text: str) -> ParsedMoney | None:
    match = SUB_UNIT_PATTERN.match(text)
    if not match:
        return None
    unit = CRYPTO_SUB_UNITS.get(match.group(2).lower())
    if unit is None:
        return None

    value = parse_number(match.group(1), NumberFormat.US)
    if value.scale != 0:
        raise ParseError(
            f"Sub-unit amounts must be whole numbers: {text!r}",
            input=text,
            code=ErrorCode.INVALID_MONEY_STRING,
            suggestion="Write the amount in the currency itself, e.g. '0.00001 BTC'.",
        )
    return ParsedMoney(unit.currency, ScaledDecimal(value.amount * unit.multiplier, unit.scale))


def _code_and_number(text: str) -> tuple[str, str] | None:
    match = CODE_FIRST_PATTERN.match(text)
    if match:
        return match.group(1), match.group(2)
    match = CODE_LAST_PATTERN.match(text)
    if match:
        return match.group(2), match.group(1)
    return None


def _try_currency_code(text: str) -> ParsedMoney | None:
    parts = _code_and_number(text)
    if parts is None:
        return None
    code, number = parts

    # Letter tokens such as "lei" or "CFA" are symbols, left to the symbol strategy
    currency = find_currency(code)
    if currency is None:
        return None
    number = number.strip()
    value = parse_number(number, detect_number_format(number, currency.code))
    return ParsedMoney(currency, _at_currency_scale(value, currency))


def _symbol_text(text: str) -> str:
    """Everything around the numeric body, without whitespace or signs."""
    digit_positions = [i for i, ch in enumerate(text) if ch.isdigit()]
    if not digit_positions:
        surrounding = text
    else:
        surrounding = text[: digit_positions[0]] + text[digit_positions[-1] + 1 :]
    return "".join(ch for ch in surrounding if not ch.isspace() and ch not in NEGATIVE_SIGNS + (".", ","))


def _check_symbol_conflict(text: str) -> None:
    symbols = _symbol_text(text)
    if not symbols or primary_currency_for(symbols) or fractional_unit_info(symbols):
        return
    has_fractional = any(s in symbols for s in fractional_symbols_longest_first())
    has_currency = any(s in symbols for s in symbols_longest_first())
    if has_fractional and has_currency:
        raise ParseError(
            f"Ambiguous money string, mixes a currency symbol and a fractional unit symbol: {text!r}",
            input=text,
            code=ErrorCode.INVALID_MONEY_STRING,
            suggestion="Use either '$0.50' or '50¢', not both.",
        )


def _try_fractional_symbol(text: str) -> ParsedMoney | None:
    _check_symbol_conflict(text)

    negative, body = _strip_negative(text)
    info = fractional_unit_info(_symbol_text(body))
    if info is None:
        return None
    if body.startswith(info.symbol):
        number = body[len(info.symbol) :].strip()
    elif body.endswith(info.symbol):
        number = body[: -len(info.symbol)].strip()
    else:
        return None
    if not number:
        return None
    if negative and number.startswith(NEGATIVE_SIGNS):
        raise _invalid_number(text)

    value = parse_number(number, detect_number_format(number, info.currency.code))
    amount = ScaledDecimal(value.amount, info.decimals + value.scale)
    return ParsedMoney(info.currency, amount.negate() if negative else amount)


def _try_currency_symbol(text: str) -> ParsedMoney | None:
    negative, body = _strip_negative(text)
    for symbol in symbols_longest_first():
        if body.startswith(symbol):
            number = body[len(symbol) :].strip()
        elif body.endswith(symbol):
            number = body[: -len(symbol)].strip()
        else:
            continue

        currency = primary_currency_for(symbol)
        if not number:
            raise ParseError(
                f"Missing amount after currency symbol: {text!r}",
                input=text,
                code=ErrorCode.INVALID_MONEY_STRING,
            )
        if negative and number.startswith(NEGATIVE_SIGNS):
            raise _invalid_number(text)

        value = parse_number(number, detect_number_format(number, currency.code))
        value = _at_currency_scale(value, currency)
        return ParsedMoney(currency, value.negate() if negative else value)
    return None


_STRATEGIES = (
    ("crypto sub-unit", _try_crypto_sub_unit),
    ("currency code", _try_currency_code),
    ("fractional symbol", _try_fractional_symbol),
    ("currency symbol", _try_currency_symbol),
)


def parse_money_string(text: str) -> ParsedMoney:
    """
    Parse monetary text into a currency and an exact amount.

    Args:
        text: Input such as "$100", "€1.234,56", "USD 100", "1000 sat", "¢50"

    Returns:
        ParsedMoney(currency, amount)

    Raises:
        ParseError: If the text is empty, malformed, ambiguous or names an
            unknown currency

    Examples:
        parse_money_string("$100") -> USD 100.00
        parse_money_string("1000 sat") -> BTC 0.00001000
        parse_money_string("JPY 100.50") -> JPY 100.50
    """
    if not isinstance(text, str) or not text.strip():
        raise ParseError(
            "Empty money string",
            input=text if isinstance(text, str) else None,
            code=ErrorCode.INVALID_MONEY_STRING,
        )

    cleaned = text.strip()
    for name, strategy in _STRATEGIES:
        result = strategy(cleaned)
        if result is not None:
            logger.debug("Parsed %r as %s via %s strategy", text, result.currency.code, name)
            return result

    parts = _code_and_number(cleaned)
    if parts is not None:
        raise ParseError(
            f"Unknown currency code: {parts[0]!r}",
            input=text,
            code=ErrorCode.UNKNOWN_CURRENCY,
            suggestion="Use an ISO 4217 code such as USD, EUR or JPY.",
        )

    raise ParseError(
        f"Invalid money string format: {text!r}",
        input=text,
        code=ErrorCode.INVALID_MONEY_STRING,
        suggestion="Use a symbol ('$100'), a code ('USD 100') or a sub-unit ('1000 sat').",
        example="Money.parse('$1,234.56')",
    )
