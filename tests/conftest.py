import io
import sys
from datetime import date
from decimal import Decimal
from pathlib import Path

import pytest

# Modules live at the repo root; make them importable when running tests from anywhere.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture
def company():
    from models import Address, Company

    return Company(
        name="Acme Studio",
        email="billing@acme.test",
        phone="+1 555 0100",
        address=Address(line1="1 Main St", city="Springfield", state="IL", zip="62701", country="USA"),
        website="acme.test",
    )


@pytest.fixture
def customer():
    from models import Address, Customer

    return Customer(
        name="Globex Corp",
        email="ap@globex.test",
        phone="+1 555 0199",
        address=Address(line1="42 Industrial Way", city="Shelbyville"),
        organization="Globex Holdings",
    )


@pytest.fixture
def items():
    from models import LineItem

    return [
        LineItem(description="Design work", quantity=Decimal("10"), rate=Decimal("100")),
        LineItem(description="Hosting", quantity=Decimal("1"), rate=Decimal("234.50")),
    ]


@pytest.fixture
def saved_methods():
    from payment_methods import BankIBAN, PayPal, PaymentMethod

    return [
        PaymentMethod(id="pm-paypal", type=PayPal(email="pay@acme.test")),
        PaymentMethod(id="pm-iban", type=BankIBAN(iban="DE89370400440532013000", swift="COBADEFF", beneficiary="Acme")),
    ]


@pytest.fixture
def make_invoice(company, customer, items):
    from models import Invoice

    def _make(**overrides):
        data = dict(
            number="INV-000123",
            issue_date=date(2026, 10, 19),
            due_date=date(2026, 11, 2),
            company=company,
            customer=customer,
            items=items,
            currency="USD",
        )
        data.update(overrides)
        return Invoice(**data)

    return _make


@pytest.fixture
def invoice(make_invoice):
    return make_invoice()


@pytest.fixture
def theme():
    from template_catalog import THEMES

    return THEMES[0]


@pytest.fixture
def png_logo():
    from PIL import Image

    buf = io.BytesIO()
    Image.new("RGB", (80, 40), (0, 122, 166)).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def canvas_pdf():
    from reportlab.pdfgen import canvas

    return canvas.Canvas(io.BytesIO(), pagesize=(595, 842), invariant=1)
