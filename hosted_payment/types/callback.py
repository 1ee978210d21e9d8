"""Result types for verified gateway callbacks."""

from pydantic import BaseModel, ConfigDict, Field

from .payment import HostedPayment


class VerifiedCallback(BaseModel):
    """Callback payload whose signature matched the merchant secret."""
    payment: HostedPayment
    signature: str
    extra: dict[str, str] = Field(default_factory=dict)    # Unsigned keys outside the schema

    model_config = ConfigDict(
        frozen=True,
    )
