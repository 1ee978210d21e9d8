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
"""Hosted payment error types and error code mapping."""

from typing import Optional


class HppError(Exception):
    """Base error for hosted payment page operations."""
    pass


class InvalidInputError(HppError, ValueError):
    """Malformed payment data: bad custom key, currency, amount or nonce."""
    pass


class MissingNonceError(HppError):
    """Timestamped signature mode selected but no nonce present."""
    pass


class FieldNotSetError(HppError, LookupError):
    """Optional payment field read before it was set."""

    def __init__(self, field: str, message: Optional[str] = None):
        """Initialize with the wire key of the missing field.

        Args:
            field: Wire key of the field that was requested
            message: Optional human-readable message
        """
        super().__init__(message or f"Payment field '{field}' is not set")
        self.field = field


class SignatureInvalidError(HppError):
    """Recomputed signature does not match the supplied one."""
    pass


class HppErrorCode:
    """Stable error codes reported to callers and logs."""
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_NONCE = "MISSING_NONCE"
    FIELD_NOT_SET = "FIELD_NOT_SET"
    INVALID_SIGNATURE = "INVALID_SIGNATURE"

    @classmethod
    def get_all_codes(cls) -> list[str]:
        """Returns all defined error codes."""
        return [
            cls.INVALID_INPUT,
            cls.MISSING_NONCE,
            cls.FIELD_NOT_SET,
            cls.INVALID_SIGNATURE
        ]


def map_error_to_code(error: Exception) -> str:
    """Maps implementation errors to error codes."""
    error_mapping = {
        InvalidInputError: HppErrorCode.INVALID_INPUT,
        MissingNonceError: HppErrorCode.MISSING_NONCE,
        FieldNotSetError: HppErrorCode.FIELD_NOT_SET,
        SignatureInvalidError: HppErrorCode.INVALID_SIGNATURE,
    }
    return error_mapping.get(type(error), "UNKNOWN_ERROR")
