# payment_methods.py
"""
Payment methods a customer can be offered on an invoice.

`PaymentMethodType` is a closed union of six frozen dataclasses. Each variant
knows its own `title`, `subtitle` (a one-line " · " summary used in pickers)
and `is_valid` (required fields present). `PaymentMethod` pairs a variant with
an id so two methods with the same payload stay distinct.

Serialized form (what the bulk command and exports read and write):

    {"id": "...", "kind": "bankIBAN", "payload": {"iban": "...", "swift": "..."}}

Decoding is tolerant: kinds match regardless of case and punctuation, fields
may be missing, and unknown kinds turn into `Other`.
"""
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from exceptions import PaymentMethodError

SUBTITLE_SEPARATOR = " · "


def _clean(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _optional(value: Any) -> Optional[str]:
    text = _clean(value)
    return text or None


def _join(parts) -> str:
    return SUBTITLE_SEPARATOR.join(p for p in parts if p)


def humanize_case_name(name: str) -> str:
    """`cashApp` / `cash_app` / `CASH-APP` -> "Cash App"."""
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", _clean(name))
    words = [w for w in re.split(r"[\s_\-.]+", text) if w]
    return " ".join(w[:1].upper() + w[1:].lower() for w in words)


class CryptoKind(str, Enum):
    BTC = "BTC"
    ETH = "ETH"
    USDT = "USDT"
    USDC = "USDC"
    BNB = "BNB"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value) -> Optional["CryptoKind"]:
        if isinstance(value, cls):
            return value
        key = _clean(value).upper()
        try:
            return cls(key)
        except ValueError:
            return None


# -----------------------------
# Variants
# -----------------------------
@dataclass(frozen=True)
class BankIBAN:
    kind = "bankIBAN"

    iban: str
    swift: str
    beneficiary: Optional[str] = None

    @property
    def title(self) -> str:
        return "Bank Transfer (IBAN/SWIFT)"

    @property
    def subtitle(self) -> str:
        iban, swift = _clean(self.iban), _clean(self.swift)
        return _join([
            _clean(self.beneficiary),
            f"IBAN: {iban}" if iban else "",
            f"SWIFT: {swift}" if swift else "",
        ])

    @property
    def is_valid(self) -> bool:
        return bool(_clean(self.iban) and _clean(self.swift))

    def payload(self) -> dict:
        return {"iban": self.iban, "swift": self.swift, "beneficiary": self.beneficiary}


@dataclass(frozen=True)
class BankUS:
    kind = "bankUS"

    account: str
    routing: str
    bank_name: Optional[str] = None

    @property
    def title(self) -> str:
        return "Bank Transfer (US ACH/Wire)"

    @property
    def subtitle(self) -> str:
        account, routing = _clean(self.account), _clean(self.routing)
        return _join([
            f"Acct: {account}" if account else "",
            f"Routing: {routing}" if routing else "",
            _clean(self.bank_name),
        ])

    @property
    def is_valid(self) -> bool:
        return bool(_clean(self.account) and _clean(self.routing))

    def payload(self) -> dict:
        return {"account": self.account, "routing": self.routing, "bankName": self.bank_name}


@dataclass(frozen=True)
class PayPal:
    kind = "paypal"

    email: str

    @property
    def title(self) -> str:
        return "PayPal"

    @property
    def subtitle(self) -> str:
        return _clean(self.email)

    @property
    def is_valid(self) -> bool:
        return bool(_clean(self.email))

    def payload(self) -> dict:
        return {"email": self.email}


@dataclass(frozen=True)
class CardLink:
    kind = "cardLink"

    url: str

    @property
    def title(self) -> str:
        return "Payment Link"

    @property
    def subtitle(self) -> str:
        return _clean(self.url)

    @property
    def is_valid(self) -> bool:
        return bool(_clean(self.url))

    def payload(self) -> dict:
        return {"url": self.url}


@dataclass(frozen=True)
class Crypto:
    """
    `kind` is None when a generic payload names a coin outside CryptoKind.
    tag / destination_tag / payment_id / network only come from such payloads
    (XRP tags, Monero payment ids, chain names) and are optional.
    """

    kind = "crypto"

    coin: Optional[CryptoKind]
    address: str
    memo: Optional[str] = None
    tag: Optional[str] = None
    destination_tag: Optional[str] = None
    payment_id: Optional[str] = None
    network: Optional[str] = None

    @property
    def symbol(self) -> Optional[str]:
        return self.coin.label if self.coin is not None else None

    @property
    def title(self) -> str:
        return f"Crypto ({self.symbol})" if self.symbol else "Crypto"

    @property
    def subtitle(self) -> str:
        address = _clean(self.address)
        prefix = f"{self.symbol}: " if self.symbol else ""
        return _join([
            f"{prefix}{address}" if address else "",
            _clean(self.memo),
        ])

    @property
    def is_valid(self) -> bool:
        return bool(_clean(self.address))

    def payload(self) -> dict:
        return {
            "kind": self.symbol,
            "address": self.address,
            "memo": self.memo,
            "tag": self.tag,
            "destinationTag": self.destination_tag,
            "paymentId": self.payment_id,
            "network": self.network,
        }


@dataclass(frozen=True)
class Other:
    kind = "other"

    name: str
    details: str

    @property
    def title(self) -> str:
        return _clean(self.name) or "Other"

    @property
    def subtitle(self) -> str:
        return _clean(self.details)

    @property
    def is_valid(self) -> bool:
        return bool(_clean(self.name) and _clean(self.details))

    def payload(self) -> dict:
        return {"name": self.name, "details": self.details}


PaymentMethodType = Union[BankIBAN, BankUS, PayPal, CardLink, Crypto, Other]

PAYMENT_VARIANTS: tuple[type, ...] = (BankIBAN, BankUS, PayPal, CardLink, Crypto, Other)


@dataclass(frozen=True)
class PaymentMethod:
    type: PaymentMethodType
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def title(self) -> str:
        return self.type.title

    @property
    def subtitle(self) -> str:
        return self.type.subtitle

    @property
    def is_valid(self) -> bool:
        return self.type.is_valid

    def to_dict(self) -> dict:
        payload = {k: v for k, v in self.type.payload().items() if v is not None}
        return {"id": self.id, "kind": self.type.kind, "payload": payload}


# -----------------------------
# Decoding
# -----------------------------
def _kind_key(value) -> str:
    return re.sub(r"[^a-z0-9]", "", _clean(value).lower())


_KIND_ALIASES = {
    "bankiban": BankIBAN,
    "iban": BankIBAN,
    "sepa": BankIBAN,
    "bankus": BankUS,
    "ach": BankUS,
    "wire": BankUS,
    "paypal": PayPal,
    "cardlink": CardLink,
    "card": CardLink,
    "paymentlink": CardLink,
    "crypto": Crypto,
    "other": Other,
}

# generic payloads name the same thing in different ways
_FIELD_ALIASES = {
    "bank_name": ("bankName", "bank_name", "bank"),
    "destination_tag": ("destinationTag", "destination_tag"),
    "payment_id": ("paymentId", "payment_id", "paymentID"),
    "coin": ("kind", "coin", "symbol", "currency"),
}


def _pick(payload: Mapping, *keys: str) -> str:
    for key in keys:
        text = _clean(payload.get(key))
        if text:
            return text
    return ""


def _decode_variant(cls: type, payload: Mapping) -> PaymentMethodType:
    if cls is BankIBAN:
        return BankIBAN(
            iban=_pick(payload, "iban"),
            swift=_pick(payload, "swift", "bic"),
            beneficiary=_optional(_pick(payload, "beneficiary", "accountHolder")),
        )
    if cls is BankUS:
        return BankUS(
            account=_pick(payload, "account", "accountNumber"),
            routing=_pick(payload, "routing", "routingNumber"),
            bank_name=_optional(_pick(payload, *_FIELD_ALIASES["bank_name"])),
        )
    if cls is PayPal:
        return PayPal(email=_pick(payload, "email"))
    if cls is CardLink:
        return CardLink(url=_pick(payload, "url", "link"))
    if cls is Crypto:
        return Crypto(
            coin=CryptoKind.parse(_pick(payload, *_FIELD_ALIASES["coin"])),
            address=_pick(payload, "address", "wallet"),
            memo=_optional(_pick(payload, "memo")),
            tag=_optional(_pick(payload, "tag")),
            destination_tag=_optional(_pick(payload, *_FIELD_ALIASES["destination_tag"])),
            payment_id=_optional(_pick(payload, *_FIELD_ALIASES["payment_id"])),
            network=_optional(_pick(payload, "network", "chain")),
        )
    return Other(
        name=_pick(payload, "name", "title"),
        details=_pick(payload, "details", "value", "address", "info", "note"),
    )


def payment_type_from_dict(data: Mapping) -> PaymentMethodType:
    """
    Accepts {"kind": ..., "payload": {...}} as written by `to_dict`, or a flat
    mapping with the kind next to the fields ({"type": "paypal", "email": ...}).
    """
    if not isinstance(data, Mapping):
        raise PaymentMethodError(f"Payment method must be a mapping, got {type(data).__name__}")

    raw_kind = data.get("kind", data.get("type", ""))
    payload = data.get("payload")
    if not isinstance(payload, Mapping):
        payload = {k: v for k, v in data.items() if k not in ("id", "kind", "type")}

    cls = _KIND_ALIASES.get(_kind_key(raw_kind))
    if cls is not None:
        return _decode_variant(cls, payload)

    # Bare coin symbols ("kind": "BTC") are crypto methods
    if CryptoKind.parse(raw_kind) is not None:
        return _decode_variant(Crypto, {"kind": raw_kind, **payload})

    other = _decode_variant(Other, payload)
    if not _clean(other.name):
        other = Other(name=humanize_case_name(raw_kind), details=other.details)
    return other


def payment_method_from_dict(data: Mapping) -> PaymentMethod:
    method_type = payment_type_from_dict(data)
    method_id = _clean(data.get("id"))
    if method_id:
        return PaymentMethod(type=method_type, id=method_id)
    return PaymentMethod(type=method_type)
