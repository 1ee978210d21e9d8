# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     https://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Hosted payment data model: schema fields and the payment container."""

import time
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import FieldNotSetError, InvalidInputError


CUSTOM_PREFIX = "custom_"
CUSTOM_KEY_MIN_LENGTH = 8

ScalarValue = Union[str, int, Decimal, bool]


class PaymentField(str, Enum):
    """Schema field keys. Declaration order is the canonical wire order.

    The mandatory block is ``order_id, user_id, mcc, currency_iso, amount``.
    The legacy PHP SDK enumerated its constants as
    ``order_id, user_id, amount, currency_iso, mcc``; a gateway that
    re-derives signatures in that order will not match this one.
    """
    # Mandatory fields
    ORDER_ID = "order_id"
    USER_ID = "user_id"
    MCC = "mcc"
    CURRENCY = "currency_iso"
    AMOUNT = "amount"

    # Nonce
    TS_NONCE = "ts_nonce"

    # Optional URLs
    SUCCESS_URL = "success_url"
    FAILURE_URL = "failure_url"

    # Additional fields
    DESCRIPTION = "description"
    PHONE = "phone"
    EMAIL = "email"
    FIRST_NAME = "first_name"
    LAST_NAME = "last_name"

    # Options
    SHOW_PHONE = "show_phone"
    SHOW_EMAIL = "show_email"
    SHOW_DESCRIPTION = "show_description"
    SHOW_GDPR_AGREEMENT = "show_gdpr_agreement"

    @classmethod
    def mandatory(cls) -> tuple["PaymentField", ...]:
        """Fields supplied at construction that can never be unset."""
        return (cls.ORDER_ID, cls.USER_ID, cls.MCC, cls.CURRENCY, cls.AMOUNT)

    @classmethod
    def flags(cls) -> tuple["PaymentField", ...]:
        """Boolean display options."""
        return (cls.SHOW_PHONE, cls.SHOW_EMAIL, cls.SHOW_DESCRIPTION, cls.SHOW_GDPR_AGREEMENT)

    @classmethod
    def from_key(cls, key: str) -> Optional["PaymentField"]:
        """Look up a field by wire key, None for keys outside the schema."""
        try:
            return cls(key)
        except ValueError:
            return None


def is_custom_key(key: Any) -> bool:
    """Whether key belongs to the merchant-defined custom namespace."""
    return (
        isinstance(key, str)
        and len(key) >= CUSTOM_KEY_MIN_LENGTH
        and key.startswith(CUSTOM_PREFIX)
    )


def validate_custom_key(key: Any) -> str:
    if not is_custom_key(key):
        raise InvalidInputError(
            f'Custom value key should start with "{CUSTOM_PREFIX}" and be at least '
            f"{CUSTOM_KEY_MIN_LENGTH} characters long, {key!r} given"
        )
    return key


def _describe(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(part) for part in error['loc']) or 'payment'}: {error['msg']}"
        for error in exc.errors()
    )


class HostedPayment(BaseModel):
    """Mutable container of payment data to be sent to the hosted payment page.

    Created once per payment attempt with the five mandatory fields, then
    configured through chained setters:

        payment = (
            HostedPayment("A1", "U9", "5411", "eur", 19.99)
            .set_redirect_urls("https://shop/ok", "https://shop/fail")
            .set_email("jane@example.com")
            .set_ts_nonce_automatically()
        )

    Optional fields read as None until set. Custom fields live in a separate
    string map whose keys must start with ``custom_``.
    """

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    # Mandatory fields
    order_id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    mcc: str = Field(min_length=1)
    currency_iso: str
    amount: Decimal = Field(ge=0, allow_inf_nan=False)

    # Nonce
    ts_nonce: Optional[int] = Field(default=None, ge=0)

    # Optional URLs
    success_url: Optional[str] = None
    failure_url: Optional[str] = None

    # Additional fields
    description: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    # Options
    show_phone: Optional[bool] = None
    show_email: Optional[bool] = None
    show_description: Optional[bool] = None
    show_gdpr_agreement: Optional[bool] = None

    custom: dict[str, str] = Field(default_factory=dict)

    def __init__(
        self,
        order_id: str,
        user_id: str,
        mcc: str,
        currency: str,
        amount: Union[Decimal, float, int, str],
        **data: Any
    ):
        """Create payment object with minimal data.

        Args:
            order_id: Unique order identifier on merchant side
            user_id: User identifier on merchant side
            mcc: Operation MCC code
            currency: Payment currency ISO A3 code, upper-cased on input
            amount: Payment amount, non-negative
            **data: Optional schema fields and ``custom`` map
        """
        try:
            super().__init__(
                order_id=order_id,
                user_id=user_id,
                mcc=mcc,
                currency_iso=currency,
                amount=amount,
                **data
            )
        except ValidationError as exc:
            raise InvalidInputError(_describe(exc)) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        if name == PaymentField.TS_NONCE.value and self.ts_nonce is not None:
            raise InvalidInputError(
                f"ts_nonce is already set to {self.ts_nonce} and cannot be changed"
            )
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise InvalidInputError(_describe(exc)) from exc

    @field_validator("currency_iso", mode="before")
    @classmethod
    def _normalize_currency(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"currency must be a string, {type(value).__name__} given")
        currency = value.strip().upper()
        if len(currency) != 3 or not currency.isascii() or not currency.isalpha():
            raise ValueError(f"currency must be an ISO 4217 alpha-3 code, {value!r} given")
        return currency

    @field_validator("amount", mode="before")
    @classmethod
    def _float_amount_as_written(cls, value: Any) -> Any:
        # 19.99 must stay Decimal("19.99"), not the nearest binary fraction
        if isinstance(value, float):
            return Decimal(repr(value))
        return value

    @field_validator("custom")
    @classmethod
    def _check_custom_keys(cls, value: dict[str, str]) -> dict[str, str]:
        for key in value:
            validate_custom_key(key)
        return value

    def _set(self, field: PaymentField, value: ScalarValue) -> "HostedPayment":
        setattr(self, field.value, value)
        return self

    @property
    def currency(self) -> str:
        return self.currency_iso

    def get(self, field: PaymentField) -> Optional[ScalarValue]:
        """Return the value of a schema field, None when unset."""
        return getattr(self, PaymentField(field).value)

    def require(self, field: PaymentField) -> ScalarValue:
        """Return the value of a schema field, raising when unset."""
        value = self.get(field)
        if value is None:
            raise FieldNotSetError(PaymentField(field).value)
        return value

    def is_set(self, field: PaymentField) -> bool:
        return self.get(field) is not None

    # Nonce

    def set_ts_nonce(self, nonce: int) -> "HostedPayment":
        return self._set(PaymentField.TS_NONCE, nonce)

    def set_ts_nonce_automatically(
        self,
        clock: Callable[[], float] = time.time
    ) -> "HostedPayment":
        """Set the nonce to the current unix time in seconds."""
        return self.set_ts_nonce(int(clock()))

    def has_ts_nonce(self) -> bool:
        return self.ts_nonce is not None

    # Optional URLs

    def set_redirect_urls(self, success_url: str, failure_url: str) -> "HostedPayment":
        return self._set(PaymentField.SUCCESS_URL, success_url)._set(
            PaymentField.FAILURE_URL, failure_url
        )

    # Additional fields

    def set_description(self, description: str) -> "HostedPayment":
        return self._set(PaymentField.DESCRIPTION, description)

    def set_phone(self, phone: str) -> "HostedPayment":
        return self._set(PaymentField.PHONE, phone)

    def set_email(self, email: str) -> "HostedPayment":
        return self._set(PaymentField.EMAIL, email)

    def set_first_last_name(self, first_name: str, last_name: str) -> "HostedPayment":
        return self._set(PaymentField.FIRST_NAME, first_name)._set(
            PaymentField.LAST_NAME, last_name
        )

    # Options

    def set_show_phone(self, show: bool) -> "HostedPayment":
        return self._set(PaymentField.SHOW_PHONE, show)

    def set_show_email(self, show: bool) -> "HostedPayment":
        return self._set(PaymentField.SHOW_EMAIL, show)

    def set_show_description(self, show: bool) -> "HostedPayment":
        return self._set(PaymentField.SHOW_DESCRIPTION, show)

    def set_show_gdpr_agreement(self, show: bool) -> "HostedPayment":
        return self._set(PaymentField.SHOW_GDPR_AGREEMENT, show)

    # Custom fields

    def add_custom_field(self, key: str, value: str) -> "HostedPayment":
        """Store a merchant-defined field, overwriting any previous value."""
        self.custom[validate_custom_key(key)] = str(value)
        return self

    def add_custom_fields(self, custom: dict[str, str]) -> "HostedPayment":
        """Apply add_custom_field for every entry, stopping at the first bad key."""
        for key, value in custom.items():
            self.add_custom_field(key, value)
        return self

    def build_query(self) -> str:
        """Unsigned form-urlencoded query of schema and custom fields."""
        # Import here to avoid circular imports
        from ..core.encoder import canonical_pairs, encode_query

        return encode_query(canonical_pairs(self))
