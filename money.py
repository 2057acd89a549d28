# money.py
"""
Money, quantity and date formatting for rendered invoices.

Everything here is keyed on the invoice's own currency code; nothing reads the
process locale. Symbols are limited to characters the standard PDF fonts can
draw (WinAnsi), other currencies print their ISO code instead.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

logger = logging.getLogger(__name__)

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "CN¥",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "SGD": "SGD ",
    "MXN": "MX$",
    "BRL": "R$",
    "CHF": "CHF ",
}

# ISO 4217 minor units where they differ from 2
MINOR_UNITS = {
    "JPY": 0,
    "KRW": 0,
    "VND": 0,
    "CLP": 0,
    "ISK": 0,
    "HUF": 0,
    "BHD": 3,
    "KWD": 3,
    "OMR": 3,
    "TND": 3,
}

# fixed English month names; strftime("%b") would follow LC_TIME
MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def to_decimal(value, default: Decimal | None = None) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise InvalidOperation(f"not a number: {value!r}")
        return default
    try:
        # float -> str first so 0.1 stays 0.1
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        if default is None:
            raise
        return default


def currency_symbol(code: str) -> str:
    code = (code or "").strip().upper()
    return CURRENCY_SYMBOLS.get(code, f"{code} " if code else "")


def format_money(value, code: str) -> str:
    """
    Format an amount in the given currency: `format_money(1234.5, "EUR")` ->
    "€1,234.50". Unknown codes print as a prefix ("PLN 1,234.50"). Anything
    that cannot be read as a number comes back as plain text.
    """
    code = (code or "").strip().upper()
    try:
        amount = to_decimal(value)
        places = MINOR_UNITS.get(code, 2)
        quantum = Decimal(1).scaleb(-places)
        amount = amount.quantize(quantum, rounding=ROUND_HALF_UP)
        sign = "-" if amount < 0 else ""
        return f"{sign}{currency_symbol(code)}{abs(amount):,.{places}f}"
    except (InvalidOperation, ValueError, TypeError, ArithmeticError):
        logger.warning("Could not format %r as %s money, using plain text", value, code or "?")
        return str(value)


def format_quantity(value) -> str:
    """Decimal to string without trailing zeros: 2 -> "2", 1.50 -> "1.5"."""
    try:
        q = to_decimal(value)
        if q == q.to_integral_value():
            return f"{q.quantize(Decimal(1)):f}"
        return f"{q.normalize():f}"
    except (InvalidOperation, ValueError, TypeError, ArithmeticError):
        logger.warning("Could not format quantity %r, using plain text", value)
        return str(value)


def format_date(value) -> str:
    """date -> "Oct 19, 2026"; anything else is printed as-is."""
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        try:
            return f"{MONTHS[value.month - 1]} {value.day:02d}, {value.year}"
        except (AttributeError, IndexError, TypeError):
            logger.warning("Could not format date %r, using plain text", value)
            return str(value)
    return str(value)
