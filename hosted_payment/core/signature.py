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
"""Redirect signature computation and verification."""

import hashlib
import hmac
from typing import Iterable, Union
from urllib.parse import quote_plus

from ..types import (
    InvalidInputError,
    MissingNonceError,
    PaymentField,
    SignatureInvalidError,
    SignatureMode
)

SIGNATURE_KEY = "signature"
SEPARATOR = "|"

_FIELD_ORDER = {field.value: index for index, field in enumerate(PaymentField)}


def signed_pairs(
    pairs: Iterable[tuple[str, str]],
    mode: Union[str, SignatureMode]
) -> list[tuple[str, str]]:
    """Select the pairs covered by the signature under ``mode``.

    Only schema fields are signed; custom fields and the signature itself are
    left out. MODE_A drops the nonce, MODE_A_TS requires it.

    Args:
        pairs: Encoded (key, value) pairs, in any order
        mode: Signature mode or its configuration string

    Returns:
        Signed pairs in schema declaration order

    Raises:
        MissingNonceError: MODE_A_TS selected and no ts_nonce pair present
    """
    mode = SignatureMode.parse(mode)
    selected = []
    has_nonce = False
    for key, value in pairs:
        if key not in _FIELD_ORDER:
            continue
        if key == PaymentField.TS_NONCE.value:
            has_nonce = True
            if not mode.requires_nonce:
                continue
        selected.append((key, value))

    if mode.requires_nonce and not has_nonce:
        raise MissingNonceError(
            f"Signature mode {mode.value} requires '{PaymentField.TS_NONCE.value}' to be set"
        )
    return sorted(selected, key=lambda pair: _FIELD_ORDER[pair[0]])


def signing_message(pairs: Iterable[tuple[str, str]]) -> bytes:
    """Join pairs as ``key=value`` with the fixed separator.

    Keys and values are form-encoded first so neither ``=`` nor the separator
    can appear raw inside them.
    """
    return SEPARATOR.join(
        f"{quote_plus(key)}={quote_plus(value)}" for key, value in pairs
    ).encode("utf-8")


def compute_signature(
    pairs: Iterable[tuple[str, str]],
    secret: str,
    mode: Union[str, SignatureMode]
) -> str:
    """Return the lowercase hex HMAC-SHA256 of the signed pairs."""
    if not secret:
        raise InvalidInputError("API secret must not be empty")
    message = signing_message(signed_pairs(pairs, mode))
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).hexdigest()


def verify_signature(
    pairs: Iterable[tuple[str, str]],
    secret: str,
    mode: Union[str, SignatureMode],
    supplied: str
) -> None:
    """Recompute the signature and compare it in constant time.

    Raises:
        SignatureInvalidError: supplied signature is empty or does not match
        MissingNonceError: MODE_A_TS selected and no ts_nonce pair present
    """
    if not supplied:
        raise SignatureInvalidError("Signature is missing")
    expected = compute_signature(pairs, secret, mode)
    if not hmac.compare_digest(expected.encode("ascii"), supplied.lower().encode("utf-8")):
        raise SignatureInvalidError("Signature does not match payload")
