"""Core package exports for hosted_payment."""

from .encoder import (
    format_value,
    schema_pairs,
    custom_pairs,
    canonical_pairs,
    encode_query
)
from .signature import (
    SIGNATURE_KEY,
    signed_pairs,
    signing_message,
    compute_signature,
    verify_signature
)
from .manager import (
    MerchantAccountManager,
    HostedPaymentPageManager
)

__all__ = [
    # Canonical encoding
    "format_value",
    "schema_pairs",
    "custom_pairs",
    "canonical_pairs",
    "encode_query",

    # Signing
    "SIGNATURE_KEY",
    "signed_pairs",
    "signing_message",
    "compute_signature",
    "verify_signature",

    # Managers
    "MerchantAccountManager",
    "HostedPaymentPageManager"
]
