"""hosted_payment - signed redirects and callbacks for a hosted payment page."""

# Types
from .types import (
    # Data model
    PaymentField,
    HostedPayment,
    VerifiedCallback,

    # Signing
    SignatureMode,

    # Configuration
    Environment,
    HostedPageSettings,

    # Error Types
    HppError,
    InvalidInputError,
    MissingNonceError,
    FieldNotSetError,
    SignatureInvalidError,
    HppErrorCode,
    map_error_to_code
)

# Core Functions
from .core import (
    canonical_pairs,
    encode_query,
    compute_signature,
    verify_signature,
    MerchantAccountManager,
    HostedPaymentPageManager
)

__version__ = "1.0.0"

__all__ = [
    # Data model
    "PaymentField",
    "HostedPayment",
    "VerifiedCallback",

    # Signing
    "SignatureMode",

    # Configuration
    "Environment",
    "HostedPageSettings",

    # Error Types
    "HppError",
    "InvalidInputError",
    "MissingNonceError",
    "FieldNotSetError",
    "SignatureInvalidError",
    "HppErrorCode",
    "map_error_to_code",

    # Core Functions
    "canonical_pairs",
    "encode_query",
    "compute_signature",
    "verify_signature",

    # Managers
    "MerchantAccountManager",
    "HostedPaymentPageManager"
]
