"""Shared pytest fixtures for hosted_payment tests."""

import pytest

from hosted_payment.core import MerchantAccountManager
from hosted_payment.types import Environment, HostedPayment, SignatureMode

API_KEY = "pk_test_8f2a"
API_SECRET = "sk_test_3c91d0e7"
REFERENCE_NONCE = 1700000000


@pytest.fixture
def api_secret():
    """Shared secret used by the manager fixtures."""
    return API_SECRET


@pytest.fixture
def sandbox_account():
    """Create a merchant account pointed at the sandbox environment."""
    return MerchantAccountManager(
        login="merchant@example.com",
        password="s3cret-password",
        environment=Environment.sandbox()
    )


@pytest.fixture
def hpp_manager(sandbox_account):
    """Hosted payment page manager in the default MODE_A_TS mode."""
    return sandbox_account.get_hosted_payment_page_manager(API_KEY, API_SECRET)


@pytest.fixture
def hpp_manager_mode_a(sandbox_account):
    """Hosted payment page manager without replay protection."""
    return sandbox_account.get_hosted_payment_page_manager(
        API_KEY, API_SECRET, SignatureMode.MODE_A
    )


@pytest.fixture
def reference_payment():
    """Payment from the reference scenario: A1/U9/5411/eur/19.99 with a fixed nonce."""
    return HostedPayment("A1", "U9", "5411", "eur", 19.99).set_ts_nonce(REFERENCE_NONCE)


@pytest.fixture
def full_payment():
    """Payment with every optional field and two custom fields configured."""
    return (
        HostedPayment("order-42", "user-7", "5999", "usd", 250)
        .set_ts_nonce(REFERENCE_NONCE)
        .set_redirect_urls("https://shop.example/ok", "https://shop.example/fail")
        .set_description("Gift card & wrapping")
        .set_phone("+15550100")
        .set_email("jane.doe@example.com")
        .set_first_last_name("Jane", "Doe")
        .set_show_phone(True)
        .set_show_email(False)
        .set_show_description(True)
        .set_show_gdpr_agreement(False)
        .add_custom_fields({"custom_zeta": "last", "custom_alpha": "first value"})
    )
