from decimal import Decimal

import pytest

from models import Address, Company, Customer, LineItem
from payment_formatter import PaymentLine, payment_lines
from payment_methods import Other, PayPal, PaymentMethod
from pdf_layout import (
    TableGeometry,
    company_lines,
    customer_lines,
    draw_items_table,
    draw_payment_block,
    fit_text,
    layout_items_table,
    layout_payment_rows,
    payment_block_height,
    plan_payment_block,
    totals_rows,
    wrap_text,
)


def _items(n, rate="10"):
    return [LineItem(description=f"Item {i}", quantity=Decimal("1"), rate=Decimal(rate)) for i in range(n)]


# -----------------------------
# Items table
# -----------------------------
def test_zebra_rows_by_index_parity():
    layout = layout_items_table(700, _items(5), "USD")
    assert [r.tinted for r in layout.rows] == [True, False, True, False, True]


def test_zebra_can_be_switched_off():
    layout = layout_items_table(700, _items(3), "USD", geometry=TableGeometry(zebra=False))
    assert not any(r.tinted for r in layout.rows)


def test_rows_follow_input_order_and_next_y():
    layout = layout_items_table(700, _items(3), "EUR")
    assert [r.description for r in layout.rows] == ["Item 0", "Item 1", "Item 2"]
    assert layout.rows[0].rate == "€10.00"
    assert layout.rows[0].quantity == "1"
    # header 28, gap 2, 3 rows of 24, trailing margin 10
    assert layout.next_y == pytest.approx(700 - 28 - 2 - 3 * 24 - 10)


def test_columns_span_the_table():
    layout = layout_items_table(700, _items(1), "USD", page_width=595, left_inset=36, right_inset=36)
    assert layout.width == 523
    x_end = layout.columns[-1][0] + layout.columns[-1][1]
    assert x_end == pytest.approx(36 + 523)
    assert layout.columns[0][1] > max(w for _, w in layout.columns[1:])


def test_empty_table_is_just_the_header():
    layout = layout_items_table(700, [], "USD")
    assert layout.rows == ()
    assert layout.next_y == pytest.approx(700 - 28 - 2 - 10)


def test_rows_shrink_to_fit_above_floor():
    layout = layout_items_table(700, _items(25), "USD", min_y=100)
    assert layout.collapsed == 0
    assert len(layout.rows) == 25
    assert layout.row_height < 24
    assert layout.next_y >= 100 - 1e-6


def test_overflow_folds_tail_into_summary_row():
    items = _items(60)
    layout = layout_items_table(700, items, "USD", min_y=100)
    assert layout.row_height == 16
    assert len(layout.rows) == 35
    assert layout.collapsed == 26
    summary = layout.rows[-1]
    assert summary.summary
    assert summary.description == "+ 26 more items"
    assert summary.amount == "$260.00"
    assert layout.next_y >= 100


def test_draw_items_table_returns_layout_next_y(canvas_pdf, theme):
    items = _items(4)
    expected = layout_items_table(650, items, "USD").next_y
    assert draw_items_table(canvas_pdf, 650, items, "USD", theme) == pytest.approx(expected)


# -----------------------------
# Payment block
# -----------------------------
def test_empty_payment_block_returns_input_y(canvas_pdf, theme):
    assert draw_payment_block(canvas_pdf, 400, theme, [], None) == 400
    assert draw_payment_block(canvas_pdf, 400, theme, [], "   \n ") == 400


def test_methods_without_content_count_as_empty(canvas_pdf, theme):
    blank = [PaymentMethod(type=PayPal(" "))]
    assert draw_payment_block(canvas_pdf, 400, theme, blank, "") == 400


def test_payment_block_moves_cursor_by_measured_height(canvas_pdf, theme):
    methods = [PaymentMethod(type=PayPal("a@b.test")), PaymentMethod(type=Other("Cash", "desk"))]
    notes = "Please include the invoice number."
    height = payment_block_height(payment_lines(methods), notes)
    assert height > 0
    assert draw_payment_block(canvas_pdf, 400, theme, methods, notes) == pytest.approx(400 - height)


def test_notes_only_block(canvas_pdf, theme):
    y = draw_payment_block(canvas_pdf, 400, theme, [], "Net 14")
    assert y == pytest.approx(400 - payment_block_height([], "Net 14"))
    assert y < 400


IBAN_LINE = PaymentLine("Bank (IBAN)", "IBAN: GB29NWBK60161331926819 • BIC/SWIFT: NWBKGB2LXXX")


def test_long_payment_value_wraps_instead_of_clipping():
    (row,) = layout_payment_rows([IBAN_LINE], 180)
    assert row.values == ("IBAN: GB29NWBK60161331926819 •", "BIC/SWIFT: NWBKGB2LXXX")
    assert row.height == 18 + 12


def test_wrapped_rows_are_measured_like_they_are_drawn(canvas_pdf, theme):
    methods = [PaymentMethod(type=Other("Bank", IBAN_LINE.value + " • Reference: please quote the invoice number"))]
    kw = dict(page_width=595, left_inset=174, right_inset=36)
    height = payment_block_height(payment_lines(methods), "Net 14", **kw)
    assert draw_payment_block(canvas_pdf, 500, theme, methods, "Net 14", **kw) == pytest.approx(500 - height)


def test_methods_past_the_cap_fold_into_one_row():
    lines = [PaymentLine("PayPal", f"Email: p{i}@acme.test") for i in range(10)]
    # 56 of fixed space, then 24 per row
    rows, height = plan_payment_block(lines, None, 523, max_height=120)
    assert [r.title for r in rows] == ["PayPal", "More"]
    assert rows[-1].summary
    assert rows[-1].values == ("+ 9 more payment methods",)
    assert height == pytest.approx(56 + 2 * 24)


def test_capped_block_moves_cursor_by_capped_height(canvas_pdf, theme):
    methods = [PaymentMethod(type=PayPal(f"p{i}@acme.test")) for i in range(10)]
    y = draw_payment_block(canvas_pdf, 400, theme, methods, None, max_height=150)
    assert 400 - y <= 150
    assert 400 - y == pytest.approx(payment_block_height(payment_lines(methods), None, max_height=150))


def test_block_within_budget_is_not_folded():
    lines = [PaymentLine("PayPal", "Email: a@b.test")]
    rows, height = plan_payment_block(lines, "Net 14", 523, max_height=500)
    assert [r.title for r in rows] == ["PayPal"]
    assert height == pytest.approx(payment_block_height(lines, "Net 14"))


# -----------------------------
# Totals and helpers
# -----------------------------
def test_totals_rows_total_equals_subtotal(invoice):
    rows = totals_rows(invoice, "USD")
    assert [r.label for r in rows] == ["Subtotal", "Tax", "Total"]
    assert rows[0].value == rows[2].value == "$1,234.50"
    assert rows[1].value == "-"
    assert rows[2].bold


def test_totals_rows_show_balance_after_payment(make_invoice):
    rows = totals_rows(make_invoice(total_paid=Decimal("200")), "USD")
    assert [(r.label, r.value) for r in rows[-2:]] == [("Paid", "$200.00"), ("Balance Due", "$1,034.50")]


def test_party_lines_skip_blanks():
    company = Company(name="Acme", email="a@acme.test", address=Address(line1="1 Main", city="Rome"))
    assert company_lines(company) == ["1 Main, Rome", "a@acme.test"]
    customer = Customer(name="Bob", phone="555", address=Address(city="Oslo", zip="0150", country="Norway"))
    assert customer_lines(customer) == ["Oslo 0150", "Norway", "555"]


def test_fit_text_adds_ellipsis_only_when_cut():
    assert fit_text("short", "Helvetica", 10, 200) == "short"
    clipped = fit_text("x" * 200, "Helvetica", 10, 50)
    assert clipped.endswith("…")
    assert len(clipped) < 200


def test_wrap_text_breaks_long_tokens():
    lines = wrap_text("DE89370400440532013000DE89370400440532013000", "Helvetica", 10, 60)
    assert len(lines) > 1
    assert "".join(lines) == "DE89370400440532013000DE89370400440532013000"
