import pytest

from exceptions import PaymentMethodError
from payment_methods import (
    BankIBAN,
    BankUS,
    CardLink,
    Crypto,
    CryptoKind,
    Other,
    PayPal,
    PaymentMethod,
    humanize_case_name,
    payment_method_from_dict,
    payment_type_from_dict,
)


def test_titles():
    assert BankIBAN("DE89", "COBADEFF").title == "Bank Transfer (IBAN/SWIFT)"
    assert BankUS("123", "456").title == "Bank Transfer (US ACH/Wire)"
    assert PayPal("a@b.test").title == "PayPal"
    assert CardLink("https://pay.test").title == "Payment Link"
    assert Crypto(CryptoKind.ETH, "0xabc").title == "Crypto (ETH)"
    assert Crypto(None, "0xabc").title == "Crypto"
    assert Other("Cash", "At the desk").title == "Cash"
    assert Other("   ", "At the desk").title == "Other"


def test_subtitle_skips_blank_fields_without_dangling_separators():
    assert BankIBAN("DE89", "COBADEFF", "Acme").subtitle == "Acme · IBAN: DE89 · SWIFT: COBADEFF"
    assert BankIBAN("DE89", "COBADEFF", "  ").subtitle == "IBAN: DE89 · SWIFT: COBADEFF"
    assert BankIBAN("", "COBADEFF").subtitle == "SWIFT: COBADEFF"
    assert BankUS("123", "456", "First Bank").subtitle == "Acct: 123 · Routing: 456 · First Bank"
    assert BankUS("123", "456").subtitle == "Acct: 123 · Routing: 456"
    assert Crypto(CryptoKind.BTC, "bc1q", "invoice 7").subtitle == "BTC: bc1q · invoice 7"
    assert Crypto(CryptoKind.BTC, "bc1q").subtitle == "BTC: bc1q"


def test_is_valid_checks_required_fields():
    assert BankIBAN("DE89", "COBADEFF").is_valid
    assert not BankIBAN("DE89", " ").is_valid
    assert BankUS("1", "2").is_valid
    assert not BankUS("1", "").is_valid
    assert PayPal("a@b.test").is_valid
    assert not PayPal("").is_valid
    assert CardLink("https://pay.test").is_valid
    assert not CardLink(" ").is_valid
    assert Crypto(None, "addr").is_valid
    assert not Crypto(CryptoKind.BTC, "").is_valid
    assert Other("Cash", "desk").is_valid
    assert not Other("Cash", "").is_valid
    assert not Other("", "desk").is_valid


def test_methods_with_same_payload_are_distinct():
    a = PaymentMethod(type=PayPal("a@b.test"))
    b = PaymentMethod(type=PayPal("a@b.test"))
    assert a.id != b.id
    assert a != b


def test_round_trip_through_dict():
    method = PaymentMethod(id="m1", type=BankUS("123", "456", "First Bank"))
    data = method.to_dict()
    assert data == {
        "id": "m1",
        "kind": "bankUS",
        "payload": {"account": "123", "routing": "456", "bankName": "First Bank"},
    }
    assert payment_method_from_dict(data) == method


def test_decoding_is_case_and_punctuation_insensitive():
    assert payment_type_from_dict({"kind": "BANK_IBAN", "payload": {"iban": "X", "swift": "Y"}}) == BankIBAN("X", "Y")
    assert payment_type_from_dict({"type": "card-link", "url": "https://pay.test"}) == CardLink("https://pay.test")


def test_decoding_crypto_variants():
    assert payment_type_from_dict({"kind": "crypto", "payload": {"kind": "usdc", "address": "0x1"}}) == Crypto(CryptoKind.USDC, "0x1")
    unknown_coin = payment_type_from_dict({"kind": "crypto", "payload": {"kind": "XRP", "address": "r1", "destinationTag": "77"}})
    assert unknown_coin.coin is None
    assert unknown_coin.destination_tag == "77"
    assert payment_type_from_dict({"kind": "BTC", "address": "bc1q"}) == Crypto(CryptoKind.BTC, "bc1q")


def test_unknown_kind_becomes_other_with_humanized_name():
    decoded = payment_type_from_dict({"kind": "cashApp", "payload": {"value": "$acme"}})
    assert decoded == Other(name="Cash App", details="$acme")


def test_other_details_fallback_order():
    decoded = payment_type_from_dict({"kind": "other", "payload": {"name": "Venmo", "info": "@acme", "note": "ignored"}})
    assert decoded.details == "@acme"


def test_missing_fields_decode_blank():
    decoded = payment_type_from_dict({"kind": "bankIBAN", "payload": {}})
    assert decoded == BankIBAN("", "", None)
    assert not decoded.is_valid


def test_non_mapping_is_rejected():
    with pytest.raises(PaymentMethodError):
        payment_type_from_dict(["paypal", "a@b.test"])


@pytest.mark.parametrize("raw, expected", [
    ("cashApp", "Cash App"),
    ("wire_transfer", "Wire Transfer"),
    ("ZELLE", "Zelle"),
    ("", ""),
])
def test_humanize_case_name(raw, expected):
    assert humanize_case_name(raw) == expected
