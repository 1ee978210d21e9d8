"""Redirect signature modes."""

from enum import Enum
from typing import Union

from .errors import InvalidInputError


class SignatureMode(str, Enum):
    """Which fields the redirect signature covers"""
    MODE_A = "MODE_A"          # Schema fields without nonce, no replay protection
    MODE_A_TS = "MODE_A_TS"    # Schema fields plus mandatory ts_nonce

    @property
    def requires_nonce(self) -> bool:
        return self is SignatureMode.MODE_A_TS

    @classmethod
    def parse(cls, value: Union[str, "SignatureMode"]) -> "SignatureMode":
        """Resolve a mode from its configuration string."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as exc:
            raise InvalidInputError(
                f"Unknown signature mode {value!r}, expected one of "
                f"{', '.join(mode.value for mode in cls)}"
            ) from exc
