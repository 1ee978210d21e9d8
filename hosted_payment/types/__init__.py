"""Types package for hosted_payment - payment data model, modes, config and errors."""

from .errors import (
    HppError,
    InvalidInputError,
    MissingNonceError,
    FieldNotSetError,
    SignatureInvalidError,
    HppErrorCode,
    map_error_to_code
)

from .modes import SignatureMode

from .payment import (
    CUSTOM_PREFIX,
    PaymentField,
    HostedPayment
)

from .callback import VerifiedCallback

from .config import (
    PRODUCTION_BASE_URL,
    SANDBOX_BASE_URL,
    Environment,
    HostedPageSettings
)

__all__ = [

    "HppError",
    "InvalidInputError",
    "MissingNonceError",
    "FieldNotSetError",
    "SignatureInvalidError",
    "HppErrorCode",
    "map_error_to_code",

    "SignatureMode",

    "CUSTOM_PREFIX",
    "PaymentField",
    "HostedPayment",

    "VerifiedCallback",

    "PRODUCTION_BASE_URL",
    "SANDBOX_BASE_URL",
    "Environment",
    "HostedPageSettings"
]
