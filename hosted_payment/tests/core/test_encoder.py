"""Unit tests for hosted_payment.core.encoder module."""

from decimal import Decimal

import pytest
from hosted_payment.core.encoder import (
    canonical_pairs,
    custom_pairs,
    encode_query,
    format_value,
    parse_flag,
    schema_pairs
)
from hosted_payment.types import HostedPayment, InvalidInputError, PaymentField


class TestFormatValue:
    """Test wire rendering of scalar values."""

    @pytest.mark.parametrize("value, expected", [
        (True, "true"),
        (False, "false"),
        (1700000000, "1700000000"),
        (0, "0"),
        (19.99, "19.99"),
        (20.0, "20"),
        (0.1, "0.1"),
        (1234567.5, "1234567.5"),
        (1e16, "10000000000000000"),
        (1e-7, "0.0000001"),
        (Decimal("10.50"), "10.5"),
        (Decimal("12345678901234567.89"), "12345678901234567.89"),
        (Decimal("1E+2"), "100"),
        ("plain text", "plain text"),
    ])
    def test_format(self, value, expected):
        assert format_value(value) == expected

    def test_non_finite(self):
        with pytest.raises(InvalidInputError):
            format_value(float("nan"))

    def test_parse_flag(self):
        assert parse_flag(PaymentField.SHOW_PHONE, "true") is True
        assert parse_flag(PaymentField.SHOW_PHONE, "false") is False

        with pytest.raises(InvalidInputError):
            parse_flag(PaymentField.SHOW_PHONE, "yes")


class TestCanonicalPairs:
    """Test canonical ordering of payment fields."""

    def test_reference_pairs(self, reference_payment):
        assert canonical_pairs(reference_payment) == [
            ("order_id", "A1"),
            ("user_id", "U9"),
            ("mcc", "5411"),
            ("currency_iso", "EUR"),
            ("amount", "19.99"),
            ("ts_nonce", "1700000000"),
        ]

    def test_unset_fields_skipped(self):
        payment = HostedPayment("A1", "U9", "5411", "EUR", 5).set_email("a@b.example")

        keys = [key for key, _ in schema_pairs(payment)]

        assert keys == ["order_id", "user_id", "mcc", "currency_iso", "amount", "email"]

    def test_schema_order_independent_of_set_order(self):
        payment = (
            HostedPayment("A1", "U9", "5411", "EUR", 5)
            .set_show_gdpr_agreement(True)
            .set_email("a@b.example")
            .set_redirect_urls("https://ok", "https://fail")
            .set_ts_nonce(7)
        )

        keys = [key for key, _ in schema_pairs(payment)]

        assert keys == [
            "order_id", "user_id", "mcc", "currency_iso", "amount",
            "ts_nonce", "success_url", "failure_url", "email", "show_gdpr_agreement"
        ]

    def test_full_payment(self, full_payment):
        pairs = canonical_pairs(full_payment)

        assert [key for key, _ in pairs] == [field.value for field in PaymentField] + [
            "custom_alpha", "custom_zeta"
        ]
        assert dict(pairs)["amount"] == "250"
        assert dict(pairs)["show_phone"] == "true"
        assert dict(pairs)["show_email"] == "false"

    def test_custom_fields_sorted(self):
        payment = HostedPayment("A1", "U9", "5411", "EUR", 5)
        payment.add_custom_field("custom_b", "2").add_custom_field("custom_a", "1")

        assert custom_pairs(payment) == [("custom_a", "1"), ("custom_b", "2")]
        assert canonical_pairs(payment)[-2:] == [("custom_a", "1"), ("custom_b", "2")]


class TestEncodeQuery:
    """Test form-urlencoding of pairs."""

    def test_space_as_plus(self):
        assert encode_query([("description", "two words")]) == "description=two+words"

    def test_reserved_characters(self):
        query = encode_query([("success_url", "https://shop.example/ok?a=1&b=2")])
        assert query == "success_url=https%3A%2F%2Fshop.example%2Fok%3Fa%3D1%26b%3D2"

    def test_order_preserved(self):
        assert encode_query([("z", "1"), ("a", "2")]) == "z=1&a=2"

    def test_unicode(self):
        assert encode_query([("first_name", "Zoë")]) == "first_name=Zo%C3%AB"
