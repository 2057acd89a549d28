# payment_formatter.py
"""
Turns payment methods into the two-column lines printed under "Payment Details".

Every template goes through `payment_lines`, so a method reads the same on
every design. Dispatch is a table keyed on the variant class; adding a variant
to `PAYMENT_VARIANTS` without a formatter here fails at import time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Callable, Iterable, Mapping, Optional, Protocol, Union

from payment_methods import (
    PAYMENT_VARIANTS,
    BankIBAN,
    BankUS,
    CardLink,
    Crypto,
    Other,
    PayPal,
    PaymentMethodType,
    payment_type_from_dict,
)

logger = logging.getLogger(__name__)

LINE_SEPARATOR = " • "


@dataclass(frozen=True)
class PaymentLine:
    title: str
    value: str


class HasPaymentType(Protocol):
    @property
    def type(self) -> PaymentMethodType: ...


PaymentInput = Union[HasPaymentType, PaymentMethodType, Mapping]


def _s(value) -> str:
    return "" if value is None else str(value).strip()


def _labeled(label: str, value) -> str:
    text = _s(value)
    return f"{label}: {text}" if text else ""


def _join(parts: Iterable[str]) -> str:
    return LINE_SEPARATOR.join(p for p in parts if p)


# -----------------------------
# Per-variant rules
# -----------------------------
def _bank_iban(m: BankIBAN) -> tuple[str, str]:
    return "Bank (IBAN)", _join([
        _s(m.beneficiary),
        _labeled("IBAN", m.iban),
        _labeled("BIC/SWIFT", m.swift),
    ])


def _bank_us(m: BankUS) -> tuple[str, str]:
    return "Bank (US)", _join([
        _labeled("Account", m.account),
        _labeled("Routing", m.routing),
        _s(m.bank_name),
    ])


def _paypal(m: PayPal) -> tuple[str, str]:
    return "PayPal", _labeled("Email", m.email)


def _card_link(m: CardLink) -> tuple[str, str]:
    return "Card Payment", _s(m.url)


def _crypto(m: Crypto) -> tuple[str, str]:
    return m.title, _join([
        _s(m.address),
        _labeled("Memo", m.memo),
        _labeled("Tag", m.tag),
        _labeled("Destination tag", m.destination_tag),
        _labeled("Payment ID", m.payment_id),
        _labeled("Network", m.network),
    ])


def _other(m: Other) -> tuple[str, str]:
    return m.title, _s(m.details)


FORMATTERS: dict[type, Callable[..., tuple[str, str]]] = {
    BankIBAN: _bank_iban,
    BankUS: _bank_us,
    PayPal: _paypal,
    CardLink: _card_link,
    Crypto: _crypto,
    Other: _other,
}

_missing = [cls.__name__ for cls in PAYMENT_VARIANTS if cls not in FORMATTERS]
if _missing:
    raise RuntimeError(f"No payment line formatter for: {', '.join(_missing)}")


# -----------------------------
# Public API
# -----------------------------
# printed for inputs no decoder recognises
GENERIC_LINE = PaymentLine(title="Payment Method", value="Custom payment method")

_VARIANT_FIELDS = tuple(sorted({f.name for cls in PAYMENT_VARIANTS for f in fields(cls)}))


def _fields_of(obj) -> dict:
    """Public attributes of a duck-typed method, as a flat mapping."""
    data = {k: v for k, v in getattr(obj, "__dict__", {}).items() if not k.startswith("_")}
    for name in _VARIANT_FIELDS:
        if name not in data and hasattr(obj, name):
            data[name] = getattr(obj, name)
    data.pop("type", None)
    return data


def _variant_of(method: PaymentInput) -> Optional[PaymentMethodType]:
    if isinstance(method, PAYMENT_VARIANTS):
        return method
    if isinstance(method, Mapping):
        return payment_type_from_dict(method)

    kind = getattr(method, "type", None)
    if isinstance(kind, PAYMENT_VARIANTS):
        return kind
    # {"type": "paypal", "email": ...} style objects
    if isinstance(kind, str):
        return payment_type_from_dict({**_fields_of(method), "kind": kind})
    if isinstance(kind, Mapping):
        return payment_type_from_dict({**_fields_of(method), **kind})
    return None


def format_payment(method: PaymentInput) -> Optional[PaymentLine]:
    """
    One line for one method, or None when the method has nothing to show.

        >>> format_payment(BankIBAN(iban="DE89", swift="COBADEFF", beneficiary="Acme")).value
        'Acme • IBAN: DE89 • BIC/SWIFT: COBADEFF'
    """
    variant = _variant_of(method)
    formatter = FORMATTERS.get(type(variant))
    if formatter is None:
        logger.warning("Unsupported payment method %r, printing a generic line", method)
        return GENERIC_LINE
    title, value = formatter(variant)
    if not value:
        return None
    return PaymentLine(title=title, value=value)


def payment_lines(methods: Iterable[PaymentInput] | None) -> list[PaymentLine]:
    """Lines in input order; methods with no content are dropped."""
    lines = []
    for method in methods or []:
        line = format_payment(method)
        if line is not None:
            lines.append(line)
    return lines
