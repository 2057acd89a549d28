from datetime import date
from decimal import Decimal

from models import Address, Invoice, InvoiceStatus, LineItem
from payment_methods import PayPal


def test_line_total_supports_fractional_quantities():
    item = LineItem(description="Consulting", quantity=Decimal("1.5"), rate=Decimal("80"))
    assert item.total == Decimal("120.0")


def test_subtotal_and_total_due(make_invoice):
    inv = make_invoice(total_paid=Decimal("234.50"))
    assert inv.subtotal == Decimal("1234.50")
    assert inv.total == inv.subtotal
    assert inv.total_due == Decimal("1000.00")


def test_total_due_never_negative(make_invoice):
    assert make_invoice(total_paid=Decimal("5000")).total_due == Decimal("0")


def test_address_one_line_skips_blanks():
    assert Address(line1="1 Main", city="Rome", country="Italy").one_line == "1 Main, Rome, Italy"
    assert Address().one_line == ""


def test_invoice_from_dict():
    inv = Invoice.from_dict({
        "number": "INV-7",
        "status": "PAID",
        "issue_date": "2026-10-19",
        "currency": "eur",
        "company": {"name": "Acme", "address": {"line1": "1 Main", "postal_code": "00100"}},
        "customer": {"name": "Globex", "organization": ""},
        "items": [
            {"description": "Work", "quantity": "2", "rate": "50.25"},
            {"description": "Free", "quantity": "", "rate": None},
        ],
        "payment_methods": [{"kind": "paypal", "payload": {"email": "a@b.test"}}],
        "payment_notes": "   ",
        "total_paid": "10",
    })
    assert inv.number == "INV-7"
    assert inv.status == InvoiceStatus.PAID
    assert inv.issue_date == date(2026, 10, 19)
    assert inv.due_date is None
    assert inv.currency == "EUR"
    assert inv.company.address.zip == "00100"
    assert inv.customer.organization is None
    assert inv.items[1].quantity == Decimal("1")
    assert inv.items[1].rate == Decimal("0")
    assert inv.subtotal == Decimal("100.50")
    assert inv.payment_methods[0].type == PayPal("a@b.test")
    assert inv.payment_notes is None
    assert inv.total_paid == Decimal("10")


def test_from_dict_defaults():
    inv = Invoice.from_dict({"status": "weird"}, default_currency="GBP")
    assert inv.status == InvoiceStatus.DRAFT
    assert inv.currency == "GBP"
    assert inv.items == ()
    assert inv.issue_date == date.today()


def test_plain_numbers_are_stored_as_decimal():
    item = LineItem(description="Hours", quantity=1.5, rate="10")
    assert item.quantity == Decimal("1.5")
    assert item.rate == Decimal("10")
    assert item.total == Decimal("15.0")


def test_float_payment_on_invoice(make_invoice):
    inv = make_invoice(total_paid=234.5)
    assert inv.total_paid == Decimal("234.5")
    assert inv.total_due == Decimal("1000.00")
