# invoice_wizard.py
"""
The last step of the invoice wizard: turn the editable draft into the
immutable `Invoice` the renderer works from.

Payment methods are resolved per draft. A draft that chose "none" gets no
methods even if the user has saved ones, and a draft that chose "saved" gets
only the ids it ticked.
"""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional, Sequence

from exceptions import IncompleteInvoiceError
from models import Company, Customer, Invoice, InvoiceStatus, LineItem
from payment_methods import PaymentMethod

DEFAULT_DUE_DAYS = 14


class PaymentChoice(str, Enum):
    SAVED = "saved"
    CUSTOM = "custom"
    NONE = "none"


@dataclass
class InvoiceDraft:
    """Mutable wizard state. Nothing here is shared with saved records."""
    number: str = ""
    issue_date: date = field(default_factory=date.today)
    due_date: Optional[date] = None
    status: InvoiceStatus = InvoiceStatus.DRAFT
    customer: Optional[Customer] = None
    items: list[LineItem] = field(default_factory=list)
    currency: str = "USD"
    payment_choice: PaymentChoice = PaymentChoice.NONE
    selected_method_ids: set[str] = field(default_factory=set)
    custom_methods: list[PaymentMethod] = field(default_factory=list)
    payment_notes: str = ""
    total_paid: Decimal = Decimal("0")


def generate_invoice_number(rng: random.Random | None = None) -> str:
    rng = rng or random.Random()
    return f"INV-{rng.randint(100000, 999999)}"


def resolved_payment_methods(draft: InvoiceDraft, saved_methods: Sequence[PaymentMethod]) -> list[PaymentMethod]:
    if draft.payment_choice == PaymentChoice.NONE:
        return []
    if draft.payment_choice == PaymentChoice.CUSTOM:
        return list(draft.custom_methods)
    return [m for m in saved_methods if m.id in draft.selected_method_ids]


def build_invoice(
    draft: InvoiceDraft,
    company: Optional[Company],
    saved_methods: Sequence[PaymentMethod] = (),
) -> Invoice:
    """
    Snapshot the draft into an Invoice. Raises IncompleteInvoiceError when the
    company, the customer or the line items are missing.
    """
    missing = []
    if company is None:
        missing.append("company")
    if draft.customer is None:
        missing.append("customer")
    if not draft.items:
        missing.append("items")
    if missing:
        raise IncompleteInvoiceError(missing)

    notes = (draft.payment_notes or "").strip()
    return Invoice(
        number=(draft.number or "").strip() or generate_invoice_number(),
        status=draft.status,
        issue_date=draft.issue_date,
        due_date=draft.due_date or draft.issue_date + timedelta(days=DEFAULT_DUE_DAYS),
        company=company,
        customer=draft.customer,
        currency=(draft.currency or "USD").upper(),
        items=tuple(draft.items),
        payment_methods=tuple(resolved_payment_methods(draft, saved_methods)),
        payment_notes=notes or None,
        total_paid=draft.total_paid,
    )
