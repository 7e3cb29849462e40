#!/usr/bin/env python3
"""
Currency Metadata

Static, read-only tables describing fiat and crypto currencies, plus the
lookup functions the money type and the string parser use:

- lookup / find_currency: ISO-style code -> Currency
- primary_currency_for: display symbol -> the currency that symbol means by default
- fractional_unit_info: fractional-unit symbol ("¢", "p", "§") -> owning currency and scale
- sub_unit_info: sub-unit name ("sat", "gwei", "cent") -> owning currency and scale

Ambiguous symbols ($, £, ¥, kr, ...) resolve to the most traded currency that
uses them. Other currencies sharing a symbol must be named by code.
"""

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, NamedTuple

from .errors import ErrorCode, InvalidInputError, ParseError


@dataclass(frozen=True)
class Currency:
    """
    Immutable currency description.

    Attributes:
        code: ISO 4217 code or ticker ("USD", "BTC")
        name: Human readable name
        decimals: Canonical scale (2 for USD, 0 for JPY, 8 for BTC)
        symbol: Display symbol
        fractional_unit: Name of the canonical minor unit ("cent", "satoshi")
        sub_units: (scale, names) pairs for named sub-units
        iso4217_support: Whether the code is an ISO 4217 code
    """

    code: str
    name: str
    decimals: int
    symbol: str
    fractional_unit: str | None = None
    sub_units: tuple[tuple[int, tuple[str, ...]], ...] = ()
    iso4217_support: bool = True

    def same_asset(self, other: "Currency") -> bool:
        """Structural equality: same code, or same name when a code is missing."""
        if self.code and other.code:
            return self.code.upper() == other.code.upper()
        return self.name == other.name

    @property
    def identifier(self) -> str:
        """Code when present, otherwise name."""
        return self.code or self.name

    def fractional_unit_names(self) -> list[str]:
        """All known names of units below the whole currency unit."""
        names = [self.fractional_unit] if self.fractional_unit else []
        for _, unit_names in self.sub_units:
            names.extend(n for n in unit_names if n not in names)
        return names

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        data = asdict(self)
        data["sub_units"] = {str(scale): list(names) for scale, names in self.sub_units}
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Currency":
        """
        Rebuild a Currency from ``to_dict`` output.

        Raises:
            InvalidInputError: If required keys are missing or malformed
        """
        try:
            sub_units = tuple(
                (int(scale), tuple(names)) for scale, names in (data.get("sub_units") or {}).items()
            )
            return cls(
                code=str(data["code"]),
                name=str(data["name"]),
                decimals=int(data["decimals"]),
                symbol=str(data.get("symbol") or data["code"]),
                fractional_unit=data.get("fractional_unit"),
                sub_units=sub_units,
                iso4217_support=bool(data.get("iso4217_support", True)),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidInputError(
                f"Invalid currency JSON: {data!r}", code=ErrorCode.INVALID_JSON, cause=e
            ) from e


class FractionalUnitSymbol(NamedTuple):
    """A symbol that denotes a fraction of a currency ("¢" = 1/100 USD)."""

    unit: str
    symbol: str
    decimals: int
    currency: Currency


class SubUnit(NamedTuple):
    """A named sub-unit: amounts counted in it are read at ``decimals`` scale."""

    currency: Currency
    decimals: int


def _fiat(code: str, name: str, decimals: int, symbol: str, unit: str | None = None) -> Currency:
    return Currency(code=code, name=name, decimals=decimals, symbol=symbol, fractional_unit=unit)


# Fiat currencies (ISO 4217)
USD = _fiat("USD", "US Dollar", 2, "$", "cent")
EUR = _fiat("EUR", "Euro", 2, "€", "cent")
GBP = Currency(
    code="GBP",
    name="Pound Sterling",
    decimals=2,
    symbol="£",
    fractional_unit="penny",
    sub_units=((2, ("penny", "pence")),),
)
JPY = _fiat("JPY", "Japanese Yen", 0, "¥", "sen")

_FIAT: tuple[Currency, ...] = (
    USD,
    EUR,
    GBP,
    JPY,
    _fiat("AED", "UAE Dirham", 2, "د.إ", "fils"),
    _fiat("AFN", "Afghani", 2, "؋", "pul"),
    _fiat("ALL", "Lek", 2, "L", "qindarka"),
    _fiat("AMD", "Armenian Dram", 2, "֏", "luma"),
    _fiat("AOA", "Kwanza", 2, "Kz", "cêntimo"),
    _fiat("ARS", "Argentine Peso", 2, "$", "centavo"),
    _fiat("AUD", "Australian Dollar", 2, "$", "cent"),
    _fiat("AWG", "Aruban Florin", 2, "ƒ", "cent"),
    _fiat("AZN", "Azerbaijan Manat", 2, "₼", "qəpik"),
    _fiat("BAM", "Convertible Mark", 2, "KM", "fening"),
    _fiat("BDT", "Taka", 2, "৳", "poisha"),
    _fiat("BGN", "Bulgarian Lev", 2, "лв", "stotinka"),
    _fiat("BHD", "Bahraini Dinar", 3, "BD", "fils"),
    _fiat("BOB", "Boliviano", 2, "Bs", "centavo"),
    _fiat("BRL", "Brazilian Real", 2, "R$", "centavo"),
    _fiat("BTN", "Ngultrum", 2, "Nu", "chhertum"),
    _fiat("BWP", "Pula", 2, "P", "thebe"),
    _fiat("CAD", "Canadian Dollar", 2, "$", "cent"),
    _fiat("CHF", "Swiss Franc", 2, "Fr", "rappen"),
    _fiat("CLP", "Chilean Peso", 0, "$", "centavo"),
    _fiat("CNY", "Yuan Renminbi", 2, "¥", "fen"),
    _fiat("COP", "Colombian Peso", 2, "$", "centavo"),
    _fiat("CRC", "Costa Rican Colon", 2, "₡", "céntimo"),
    _fiat("CZK", "Czech Koruna", 2, "Kč", "haléř"),
    _fiat("DKK", "Danish Krone", 2, "kr", "øre"),
    _fiat("DZD", "Algerian Dinar", 2, "DA", "santeem"),
    _fiat("EGP", "Egyptian Pound", 2, "E£", "piastre"),
    _fiat("ETB", "Ethiopian Birr", 2, "Br", "santim"),
    _fiat("GEL", "Lari", 2, "₾", "tetri"),
    _fiat("GHS", "Ghana Cedi", 2, "₵", "pesewa"),
    _fiat("GMD", "Dalasi", 2, "D", "butut"),
    _fiat("GTQ", "Quetzal", 2, "Q", "centavo"),
    _fiat("HKD", "Hong Kong Dollar", 2, "$", "cent"),
    _fiat("HTG", "Gourde", 2, "G", "centime"),
    _fiat("HUF", "Forint", 2, "Ft", "fillér"),
    _fiat("IDR", "Rupiah", 2, "Rp", "sen"),
    _fiat("ILS", "New Israeli Sheqel", 2, "₪", "agora"),
    _fiat("INR", "Indian Rupee", 2, "₹", "paisa"),
    _fiat("IQD", "Iraqi Dinar", 3, "ع.د", "fils"),
    _fiat("ISK", "Iceland Krona", 0, "kr", "eyrir"),
    _fiat("JOD", "Jordanian Dinar", 3, "د.ا", "fils"),
    _fiat("KES", "Kenyan Shilling", 2, "Sh", "cent"),
    _fiat("KHR", "Riel", 2, "៛", "sen"),
    _fiat("KRW", "Won", 0, "₩", "jeon"),
    _fiat("KWD", "Kuwaiti Dinar", 3, "د.ك", "fils"),
    _fiat("KZT", "Tenge", 2, "₸", "tiyn"),
    _fiat("LAK", "Lao Kip", 2, "₭", "att"),
    _fiat("LBP", "Lebanese Pound", 2, "ل.ل", "piastre"),
    _fiat("LSL", "Loti", 2, "L", "sente"),
    _fiat("LYD", "Libyan Dinar", 3, "ل.د", "dirham"),
    _fiat("MAD", "Moroccan Dirham", 2, "د.م.", "centime"),
    _fiat("MGA", "Malagasy Ariary", 2, "Ar", "iraimbilanja"),
    _fiat("MKD", "Denar", 2, "MK", "deni"),
    _fiat("MMK", "Kyat", 2, "Ks", "pya"),
    _fiat("MNT", "Tugrik", 2, "₮", "möngö"),
    _fiat("MRU", "Ouguiya", 2, "UM", "khoums"),
    _fiat("MVR", "Rufiyaa", 2, "ރ", "laari"),
    _fiat("MXN", "Mexican Peso", 2, "$", "centavo"),
    _fiat("MYR", "Malaysian Ringgit", 2, "RM", "sen"),
    _fiat("MZN", "Mozambique Metical", 2, "MT", "centavo"),
    _fiat("NGN", "Naira", 2, "₦", "kobo"),
    _fiat("NIO", "Cordoba Oro", 2, "C$", "centavo"),
    _fiat("NOK", "Norwegian Krone", 2, "kr", "øre"),
    _fiat("NZD", "New Zealand Dollar", 2, "$", "cent"),
    _fiat("OMR", "Rial Omani", 3, "ر.ع.", "baisa"),
    _fiat("PAB", "Balboa", 2, "B/.", "centésimo"),
    _fiat("PEN", "Sol", 2, "S/", "céntimo"),
    _fiat("PHP", "Philippine Peso", 2, "₱", "sentimo"),
    _fiat("PKR", "Pakistan Rupee", 2, "₨", "paisa"),
    _fiat("PLN", "Zloty", 2, "zł", "grosz"),
    _fiat("PYG", "Guarani", 0, "₲", "céntimo"),
    _fiat("QAR", "Qatari Rial", 2, "ر.ق", "dirham"),
    _fiat("RON", "Romanian Leu", 2, "lei", "ban"),
    _fiat("RUB", "Russian Ruble", 2, "₽", "kopek"),
    _fiat("SAR", "Saudi Riyal", 2, "﷼", "halala"),
    _fiat("SEK", "Swedish Krona", 2, "kr", "öre"),
    _fiat("SGD", "Singapore Dollar", 2, "$", "cent"),
    _fiat("SLE", "Leone", 2, "Le", "cent"),
    _fiat("SSP", "South Sudanese Pound", 2, "ج.س.", "piaster"),
    _fiat("STN", "Dobra", 2, "Db", "cêntimo"),
    _fiat("SZL", "Lilangeni", 2, "E", "cent"),
    _fiat("THB", "Baht", 2, "฿", "satang"),
    _fiat("TND", "Tunisian Dinar", 3, "د.ت", "millime"),
    _fiat("TOP", "Pa'anga", 2, "T$", "seniti"),
    _fiat("TRY", "Turkish Lira", 2, "₺", "kuruş"),
    _fiat("TWD", "New Taiwan Dollar", 2, "$", "cent"),
    _fiat("UAH", "Hryvnia", 2, "₴", "kopiyka"),
    _fiat("UGX", "Uganda Shilling", 0, "USh", "cent"),
    _fiat("VND", "Dong", 0, "₫", "hào"),
    _fiat("VUV", "Vatu", 0, "Vt"),
    _fiat("XAF", "CFA Franc BEAC", 0, "FCFA", "centime"),
    _fiat("XOF", "CFA Franc BCEAO", 0, "CFA", "centime"),
    _fiat("ZAR", "Rand", 2, "R", "cent"),
    _fiat("ZMW", "Zambian Kwacha", 2, "K", "ngwee"),
)

# Cryptocurrencies
BTC = Currency(
    code="BTC",
    name="Bitcoin",
    decimals=8,
    symbol="₿",
    fractional_unit="satoshi",
    sub_units=(
        (8, ("satoshi", "sat")),
        (6, ("bit",)),
        (11, ("millisatoshi", "msat")),
    ),
    iso4217_support=False,
)
ETH = Currency(
    code="ETH",
    name="Ether",
    decimals=18,
    symbol="Ξ",
    fractional_unit="wei",
    sub_units=(
        (18, ("wei",)),
        (15, ("kwei", "babbage")),
        (12, ("mwei",)),
        (9, ("gwei", "shannon")),
        (6, ("szabo",)),
        (3, ("finney",)),
    ),
    iso4217_support=False,
)
SOL = Currency(
    code="SOL",
    name="Solana",
    decimals=9,
    symbol="◎",
    fractional_unit="lamport",
    sub_units=((9, ("lamport",)),),
    iso4217_support=False,
)

_CRYPTO: tuple[Currency, ...] = (
    BTC,
    ETH,
    SOL,
    Currency(code="LTC", name="Litecoin", decimals=8, symbol="Ł", fractional_unit="litoshi", iso4217_support=False),
    Currency(code="USDC", name="USD Coin", decimals=6, symbol="USDC", iso4217_support=False),
    Currency(code="USDT", name="Tether", decimals=6, symbol="USDT", iso4217_support=False),
)

CURRENCIES: MappingProxyType = MappingProxyType({c.code: c for c in _FIAT + _CRYPTO})


def _c(code: str) -> Currency:
    return CURRENCIES[code]


# Symbol -> default currency, highest trading volume wins for shared symbols
PRIMARY_SYMBOL_MAP: MappingProxyType = MappingProxyType(
    {
        "€": EUR,
        "₿": BTC,
        "Ξ": ETH,
        "◎": SOL,
        "$": USD,
        "US$": USD,
        "£": GBP,
        "¥": JPY,
        "Fr": _c("CHF"),
        "kr": _c("SEK"),
        "₩": _c("KRW"),
        "₨": _c("INR"),
        "₹": _c("INR"),
        "R$": _c("BRL"),
        "₽": _c("RUB"),
        "₴": _c("UAH"),
        "₺": _c("TRY"),
        "₸": _c("KZT"),
        "₼": _c("AZN"),
        "₾": _c("GEL"),
        "₵": _c("GHS"),
        "₲": _c("PYG"),
        "₱": _c("PHP"),
        "₮": _c("MNT"),
        "₭": _c("LAK"),
        "₫": _c("VND"),
        "₪": _c("ILS"),
        "₦": _c("NGN"),
        "₡": _c("CRC"),
        "៛": _c("KHR"),
        "฿": _c("THB"),
        "৳": _c("BDT"),
        "؋": _c("AFN"),
        "֏": _c("AMD"),
        "zł": _c("PLN"),
        "Kč": _c("CZK"),
        "lei": _c("RON"),
        "лв": _c("BGN"),
        "Ft": _c("HUF"),
        "﷼": _c("SAR"),
        "د.إ": _c("AED"),
        "ر.ق": _c("QAR"),
        "د.ك": _c("KWD"),
        "ر.ع.": _c("OMR"),
        "د.ت": _c("TND"),
        "د.م.": _c("MAD"),
        "ج.س.": _c("SSP"),
        "ل.ل": _c("LBP"),
        "ل.د": _c("LYD"),
        "Br": _c("ETB"),
        "R": _c("ZAR"),
        "Sh": _c("KES"),
        "RM": _c("MYR"),
        "Rp": _c("IDR"),
        "Vt": _c("VUV"),
        "T$": _c("TOP"),
        "ƒ": _c("AWG"),
        "L": _c("ALL"),
        "P": _c("BWP"),
        "S/": _c("PEN"),
        "Bs": _c("BOB"),
        "Q": _c("GTQ"),
        "C$": _c("NIO"),
        "B/.": _c("PAB"),
        "Le": _c("SLE"),
        "D": _c("GMD"),
        "Db": _c("STN"),
        "K": _c("ZMW"),
        "ZK": _c("ZMW"),
        "MT": _c("MZN"),
        "Nu": _c("BTN"),
        "UM": _c("MRU"),
        "DA": _c("DZD"),
        "Kz": _c("AOA"),
        "Ar": _c("MGA"),
        "E": _c("SZL"),
        "G": _c("HTG"),
        "BD": _c("BHD"),
        "Ks": _c("MMK"),
        "KM": _c("BAM"),
        "MK": _c("MKD"),
        "E£": _c("EGP"),
        "USh": _c("UGX"),
        "FCFA": _c("XAF"),
        "CFA": _c("XOF"),
    }
)

FRACTIONAL_UNIT_SYMBOLS: MappingProxyType = MappingProxyType(
    {
        "§": FractionalUnitSymbol(unit="sat", symbol="§", decimals=8, currency=BTC),
        "¢": FractionalUnitSymbol(unit="cent", symbol="¢", decimals=2, currency=USD),
        "p": FractionalUnitSymbol(unit="pence", symbol="p", decimals=2, currency=GBP),
    }
)

SUB_UNIT_REGISTRY: MappingProxyType = MappingProxyType(
    {
        # Bitcoin
        "sat": SubUnit(BTC, 8),
        "sats": SubUnit(BTC, 8),
        "satoshi": SubUnit(BTC, 8),
        "satoshis": SubUnit(BTC, 8),
        "msat": SubUnit(BTC, 11),
        "millisat": SubUnit(BTC, 11),
        "millisatoshi": SubUnit(BTC, 11),
        # Ethereum
        "wei": SubUnit(ETH, 18),
        "kwei": SubUnit(ETH, 15),
        "babbage": SubUnit(ETH, 15),
        "mwei": SubUnit(ETH, 12),
        "gwei": SubUnit(ETH, 9),
        "shannon": SubUnit(ETH, 9),
        "szabo": SubUnit(ETH, 6),
        "finney": SubUnit(ETH, 3),
        # Solana
        "lamport": SubUnit(SOL, 9),
        "lamports": SubUnit(SOL, 9),
        # Fiat
        "cent": SubUnit(USD, 2),
        "cents": SubUnit(USD, 2),
        "penny": SubUnit(GBP, 2),
        "pence": SubUnit(GBP, 2),
        "eurocent": SubUnit(EUR, 2),
        "yen": SubUnit(JPY, 0),
    }
)

_SYMBOLS_LONGEST_FIRST = tuple(sorted(PRIMARY_SYMBOL_MAP, key=len, reverse=True))
_FRACTIONAL_SYMBOLS_LONGEST_FIRST = tuple(sorted(FRACTIONAL_UNIT_SYMBOLS, key=len, reverse=True))


def find_currency(code: str) -> Currency | None:
    """Look up a currency by code, case-insensitively. Returns None when unknown."""
    if not code:
        return None
    return CURRENCIES.get(code.strip().upper())


def lookup(code: str) -> Currency:
    """
    Look up a currency by code.

    Raises:
        ParseError: If the code is unknown
    """
    currency = find_currency(code)
    if currency is None:
        raise ParseError(
            f"Unknown currency code: {code!r}",
            input=code,
            code=ErrorCode.UNKNOWN_CURRENCY,
            suggestion="Use an ISO 4217 code such as USD or a supported crypto ticker such as BTC.",
        )
    return currency


def primary_currency_for(symbol: str) -> Currency | None:
    """Currency a display symbol resolves to by default."""
    return PRIMARY_SYMBOL_MAP.get(symbol)


def fractional_unit_info(symbol: str) -> FractionalUnitSymbol | None:
    """Owning currency and scale of a fractional-unit symbol."""
    return FRACTIONAL_UNIT_SYMBOLS.get(symbol)


def sub_unit_info(unit: str) -> SubUnit | None:
    """Owning currency and scale of a named sub-unit (case-insensitive)."""
    return SUB_UNIT_REGISTRY.get(unit.strip().lower())


def symbols_longest_first() -> tuple[str, ...]:
    """Currency symbols ordered so that longer symbols match before their prefixes."""
    return _SYMBOLS_LONGEST_FIRST


def fractional_symbols_longest_first() -> tuple[str, ...]:
    """Fractional-unit symbols ordered longest first."""
    return _FRACTIONAL_SYMBOLS_LONGEST_FIRST
