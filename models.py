# models.py
from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from money import to_decimal
from payment_methods import PaymentMethod, payment_method_from_dict

ZERO = Decimal("0")


def _new_id() -> str:
    return uuid.uuid4().hex


def _s(value) -> str:
    return "" if value is None else str(value).strip()


def _optional(value) -> Optional[str]:
    return _s(value) or None


def _to_date(value, default: Optional[date] = None) -> Optional[date]:
    if value is None or value == "":
        return default
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return default


# -----------------------------
# Parties
# -----------------------------
@dataclass(frozen=True)
class Address:
    line1: str = ""
    line2: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""

    @property
    def one_line(self) -> str:
        parts = [self.line1, self.line2, self.city, self.state, self.zip, self.country]
        return ", ".join(p.strip() for p in parts if p and p.strip())

    @classmethod
    def from_dict(cls, data: Mapping | str | None) -> "Address":
        if isinstance(data, str):
            return cls(line1=data.strip())
        data = data or {}
        return cls(
            line1=_s(data.get("line1")),
            line2=_s(data.get("line2")),
            city=_s(data.get("city")),
            state=_s(data.get("state")),
            zip=_s(data.get("zip", data.get("postal_code"))),
            country=_s(data.get("country")),
        )


@dataclass(frozen=True)
class Company:
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)
    website: Optional[str] = None
    id: str = field(default_factory=_new_id)

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "Company":
        data = data or {}
        return cls(
            name=_s(data.get("name")),
            email=_s(data.get("email")),
            phone=_s(data.get("phone")),
            address=Address.from_dict(data.get("address")),
            website=_optional(data.get("website")),
            id=_s(data.get("id")) or _new_id(),
        )


@dataclass(frozen=True)
class Customer:
    name: str = ""
    email: str = ""
    phone: str = ""
    address: Address = field(default_factory=Address)
    organization: Optional[str] = None
    id: str = field(default_factory=_new_id)

    @classmethod
    def from_dict(cls, data: Mapping | None) -> "Customer":
        data = data or {}
        return cls(
            name=_s(data.get("name")),
            email=_s(data.get("email")),
            phone=_s(data.get("phone")),
            address=Address.from_dict(data.get("address")),
            organization=_optional(data.get("organization")),
            id=_s(data.get("id")) or _new_id(),
        )


# -----------------------------
# Invoice
# -----------------------------
class InvoiceStatus(str, Enum):
    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"

    @property
    def label(self) -> str:
        return self.value.title()

    @classmethod
    def parse(cls, value) -> "InvoiceStatus":
        try:
            return cls(_s(value).lower())
        except ValueError:
            return cls.DRAFT


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: Decimal
    rate: Decimal
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        # floats and strings are accepted, stored as Decimal
        object.__setattr__(self, "quantity", to_decimal(self.quantity, ZERO))
        object.__setattr__(self, "rate", to_decimal(self.rate, ZERO))

    # Convenience total (computed, not stored)
    @property
    def total(self) -> Decimal:
        return self.quantity * self.rate

    @classmethod
    def from_dict(cls, data: Mapping) -> "LineItem":
        return cls(
            description=_s(data.get("description")),
            quantity=to_decimal(data.get("quantity"), Decimal("1")),
            rate=to_decimal(data.get("rate", data.get("price")), ZERO),
            id=_s(data.get("id")) or _new_id(),
        )


@dataclass(frozen=True)
class Invoice:
    """
    Immutable snapshot handed to the renderer. Company, customer and payment
    methods are copies taken when the invoice was generated, so later edits to
    the saved records do not change an existing document.
    """
    number: str
    issue_date: date
    company: Company = field(default_factory=Company)
    customer: Customer = field(default_factory=Customer)
    items: tuple[LineItem, ...] = ()
    currency: str = "USD"
    status: InvoiceStatus = InvoiceStatus.DRAFT
    due_date: Optional[date] = None
    payment_methods: tuple[PaymentMethod, ...] = ()
    payment_notes: Optional[str] = None
    total_paid: Decimal = ZERO
    id: str = field(default_factory=_new_id)

    def __post_init__(self):
        # lists are accepted for convenience, stored as tuples
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "payment_methods", tuple(self.payment_methods))
        object.__setattr__(self, "total_paid", to_decimal(self.total_paid, ZERO))

    @property
    def subtotal(self) -> Decimal:
        return sum((it.total for it in self.items), ZERO)

    @property
    def total(self) -> Decimal:
        # tax is not modelled
        return self.subtotal

    @property
    def total_due(self) -> Decimal:
        return max(ZERO, self.total - self.total_paid)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], default_currency: str = "USD") -> "Invoice":
        """
        Build an invoice from a JSON document. Missing fields load as blanks
        so exports from other tools still render.
        """
        methods = [payment_method_from_dict(m) for m in (data.get("payment_methods") or [])]
        return cls(
            id=_s(data.get("id")) or _new_id(),
            number=_s(data.get("number")),
            status=InvoiceStatus.parse(data.get("status")),
            issue_date=_to_date(data.get("issue_date"), date.today()),
            due_date=_to_date(data.get("due_date")),
            company=Company.from_dict(data.get("company")),
            customer=Customer.from_dict(data.get("customer")),
            currency=(_s(data.get("currency")) or default_currency).upper(),
            items=tuple(LineItem.from_dict(it) for it in (data.get("items") or [])),
            payment_methods=tuple(methods),
            payment_notes=_optional(data.get("payment_notes")),
            total_paid=to_decimal(data.get("total_paid"), ZERO),
        )
