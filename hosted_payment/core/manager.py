"""Merchant account and hosted payment page managers."""

import logging
from typing import Any, Mapping, Optional, Union
from urllib.parse import parse_qsl, urlsplit

from ..types import (
    Environment,
    HostedPageSettings,
    HostedPayment,
    InvalidInputError,
    MissingNonceError,
    PaymentField,
    SignatureInvalidError,
    SignatureMode,
    VerifiedCallback
)
from ..types.payment import is_custom_key
from .encoder import canonical_pairs, encode_query, parse_flag
from .signature import SIGNATURE_KEY, compute_signature, verify_signature

logger = logging.getLogger(__name__)


class MerchantAccountManager:
    """General manager for merchant account activity."""

    def __init__(
        self,
        login: str,
        password: str,
        environment: Optional[Environment] = None
    ):
        """Initialize the account manager.

        Args:
            login: Merchant login
            password: Merchant password
            environment: Environment settings, production when omitted
        """
        if not login:
            raise InvalidInputError("Merchant login must not be empty")
        self._login = login
        self._password = password
        self._environment = environment or Environment.production()

    @classmethod
    def from_settings(cls, settings: HostedPageSettings) -> "MerchantAccountManager":
        return cls(settings.login, settings.password, settings.get_environment())

    @property
    def login(self) -> str:
        return self._login

    @property
    def environment(self) -> Environment:
        return self._environment

    def get_hosted_payment_page_manager(
        self,
        api_key: str,
        api_secret: str,
        signature_mode: Union[str, SignatureMode] = SignatureMode.MODE_A_TS
    ) -> "HostedPaymentPageManager":
        """Constructs the hosted payment page manager for this account.

        Args:
            api_key: Hosted payment page API key
            api_secret: Hosted payment page secret
            signature_mode: Redirect signature mode ('MODE_A', 'MODE_A_TS')
        """
        return HostedPaymentPageManager(self, api_key, api_secret, signature_mode)

    def __repr__(self) -> str:
        return f"MerchantAccountManager(login={self._login!r}, environment={self._environment.name!r})"


class HostedPaymentPageManager:
    """Builds signed redirect URLs and verifies signed gateway callbacks.

    Holds only immutable credentials, so one instance can be shared across
    threads and requests.
    """

    def __init__(
        self,
        account: MerchantAccountManager,
        api_key: str,
        api_secret: str,
        signature_mode: Union[str, SignatureMode] = SignatureMode.MODE_A_TS
    ):
        if not api_key:
            raise InvalidInputError("API key must not be empty")
        if not api_secret:
            raise InvalidInputError("API secret must not be empty")
        self._account = account
        self._api_key = api_key
        self._api_secret = api_secret
        self._signature_mode = SignatureMode.parse(signature_mode)

    @classmethod
    def from_settings(cls, settings: HostedPageSettings) -> "HostedPaymentPageManager":
        account = MerchantAccountManager.from_settings(settings)
        return account.get_hosted_payment_page_manager(
            settings.api_key,
            settings.api_secret,
            settings.signature_mode
        )

    @property
    def account(self) -> MerchantAccountManager:
        return self._account

    @property
    def api_key(self) -> str:
        return self._api_key

    @property
    def signature_mode(self) -> SignatureMode:
        return self._signature_mode

    def _check_payment(self, payment: HostedPayment) -> None:
        for field in PaymentField.mandatory():
            payment.require(field)
        if self._signature_mode.requires_nonce and not payment.has_ts_nonce():
            logger.warning(
                f"Refusing to sign order {payment.order_id}: "
                f"{self._signature_mode.value} requires a nonce"
            )
            raise MissingNonceError(
                f"Signature mode {self._signature_mode.value} requires "
                f"'{PaymentField.TS_NONCE.value}' to be set"
            )

    def sign(self, payment: HostedPayment) -> str:
        """Signature of the payment under the configured mode."""
        self._check_payment(payment)
        return compute_signature(canonical_pairs(payment), self._api_secret, self._signature_mode)

    def build_query(self, payment: HostedPayment) -> str:
        """Signed query string: schema fields, custom fields, then signature."""
        self._check_payment(payment)
        pairs = canonical_pairs(payment)
        pairs.append((SIGNATURE_KEY, compute_signature(pairs, self._api_secret, self._signature_mode)))
        logger.info(
            f"Built signed query for order {payment.order_id} "
            f"({len(pairs) - 1} fields, {self._signature_mode.value})"
        )
        return encode_query(pairs)

    def build_redirect_url(self, payment: HostedPayment) -> str:
        """Ready-to-redirect URL on the account environment."""
        base_url = self._account.environment.base_url
        separator = "&" if "?" in base_url else "?"
        return f"{base_url}{separator}{self.build_query(payment)}"

    def verify_callback(self, params: Union[Mapping[str, Any], str]) -> VerifiedCallback:
        """Verify a signed redirect or webhook payload from the gateway.

        Args:
            params: Received parameters as a mapping, a query string or a
                full callback URL

        Returns:
            VerifiedCallback with the decoded payment

        Raises:
            SignatureInvalidError: signature absent or not matching
            MissingNonceError: MODE_A_TS payload without ts_nonce
            InvalidInputError: payload signed correctly but malformed
        """
        received = _normalize_params(params)
        supplied = received.pop(SIGNATURE_KEY, "")
        schema = [(field.value, received[field.value]) for field in PaymentField if field.value in received]

        try:
            verify_signature(schema, self._api_secret, self._signature_mode, supplied)
        except (SignatureInvalidError, MissingNonceError) as e:
            logger.warning(f"Callback rejected for order {received.get(PaymentField.ORDER_ID.value)!r}: {e}")
            raise

        payment, extra = _decode_payment(received)
        logger.info(f"Verified callback for order {payment.order_id}")
        return VerifiedCallback(payment=payment, signature=supplied, extra=extra)


def _normalize_params(params: Union[Mapping[str, Any], str]) -> dict[str, str]:
    if isinstance(params, str):
        parts = urlsplit(params)
        # Only a full URL carries a query component; a bare query may hold a raw "?"
        query = parts.query if parts.scheme and parts.netloc else params.lstrip("?")
        pairs = parse_qsl(query, keep_blank_values=True)
        keys = [key for key, _ in pairs]
        duplicated = sorted({key for key in keys if keys.count(key) > 1})
        if duplicated:
            raise InvalidInputError(f"Callback repeats parameters: {', '.join(duplicated)}")
        return dict(pairs)

    received = {}
    for key, value in params.items():
        if isinstance(value, (list, tuple)):
            if len(value) != 1:
                raise InvalidInputError(f"Callback parameter '{key}' must have exactly one value")
            value = value[0]
        received[str(key)] = str(value)
    return received


def _decode_payment(received: dict[str, str]) -> tuple[HostedPayment, dict[str, str]]:
    missing = [field.value for field in PaymentField.mandatory() if field.value not in received]
    if missing:
        raise InvalidInputError(f"Callback is missing mandatory fields: {', '.join(missing)}")

    optional: dict[str, Any] = {}
    custom: dict[str, str] = {}
    extra: dict[str, str] = {}
    for key, value in received.items():
        field = PaymentField.from_key(key)
        if field is None:
            if is_custom_key(key):
                custom[key] = value
            else:
                extra[key] = value
        elif field in PaymentField.flags():
            optional[key] = parse_flag(field, value)
        elif field not in PaymentField.mandatory():
            optional[key] = value

    payment = HostedPayment(
        received[PaymentField.ORDER_ID.value],
        received[PaymentField.USER_ID.value],
        received[PaymentField.MCC.value],
        received[PaymentField.CURRENCY.value],
        received[PaymentField.AMOUNT.value],
        custom=custom,
        **optional
    )
    return payment, extra


__all__ = [
    "MerchantAccountManager",
    "HostedPaymentPageManager"
]
