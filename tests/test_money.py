from datetime import date
from decimal import Decimal

from money import format_date, format_money, format_quantity, to_decimal


def test_eur_uses_the_invoice_currency_not_dollars():
    text = format_money(1234.5, "EUR")
    assert text == "€1,234.50"
    assert "$" not in text


def test_usd_and_lowercase_codes():
    assert format_money(Decimal("1234.5"), "USD") == "$1,234.50"
    assert format_money("1234.5", "usd") == "$1,234.50"


def test_zero_decimal_currency_rounds_half_up():
    assert format_money(Decimal("1234.5"), "JPY") == "¥1,235"


def test_unknown_code_is_printed_as_prefix():
    assert format_money(10, "PLN") == "PLN 10.00"


def test_negative_amount_keeps_sign_in_front():
    assert format_money(Decimal("-12"), "USD") == "-$12.00"


def test_half_cent_rounds_up():
    assert format_money(Decimal("0.005"), "USD") == "$0.01"


def test_unformattable_value_falls_back_to_plain_text():
    assert format_money("n/a", "USD") == "n/a"


def test_quantity_has_no_currency_and_no_trailing_zeros():
    assert format_quantity(Decimal("2.00")) == "2"
    assert format_quantity(Decimal("1.50")) == "1.5"
    assert format_quantity(0.25) == "0.25"
    assert format_quantity(Decimal("100")) == "100"


def test_quantity_fallback():
    assert format_quantity("lots") == "lots"


def test_dates():
    assert format_date(date(2026, 10, 19)) == "Oct 19, 2026"
    assert format_date(date(2026, 3, 5)) == "Mar 05, 2026"
    assert format_date(None) == ""
    assert format_date("someday") == "someday"


def test_to_decimal_default_for_blank_or_bad_input():
    assert to_decimal("", Decimal("1")) == Decimal("1")
    assert to_decimal("abc", Decimal("0")) == Decimal("0")
    assert to_decimal(0.1) == Decimal("0.1")
