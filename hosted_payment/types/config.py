"""Configuration types for hosted_payment."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import InvalidInputError
from .modes import SignatureMode

PRODUCTION_BASE_URL = "https://hpp.genome.eu"
SANDBOX_BASE_URL = "https://hpp-sandbox.genome.eu"


class Environment(BaseModel):
    """Gateway environment the customer is redirected to."""
    name: str
    base_url: str = Field(min_length=1)

    @classmethod
    def production(cls) -> "Environment":
        return cls(name="production", base_url=PRODUCTION_BASE_URL)

    @classmethod
    def sandbox(cls) -> "Environment":
        return cls(name="sandbox", base_url=SANDBOX_BASE_URL)

    @classmethod
    def from_name(cls, name: str) -> "Environment":
        """Resolve a named environment ("production" or "sandbox")."""
        factories = {
            "production": cls.production,
            "sandbox": cls.sandbox,
        }
        factory = factories.get(name.strip().lower())
        if factory is None:
            raise InvalidInputError(
                f"Unknown environment {name!r}, expected one of {', '.join(factories)}"
            )
        return factory()


class HostedPageSettings(BaseSettings):
    """Merchant credentials and HPP options read from ``HPP_*`` variables."""
    login: str
    password: str
    api_key: str
    api_secret: str
    environment: str = "production"
    base_url: Optional[str] = None
    signature_mode: SignatureMode = SignatureMode.MODE_A_TS

    model_config = SettingsConfigDict(env_prefix="HPP_", env_file=".env", extra="ignore")

    @field_validator("signature_mode", mode="before")
    @classmethod
    def _parse_signature_mode(cls, value):
        return SignatureMode.parse(value)

    def get_environment(self) -> Environment:
        """Named environment, with base_url taking precedence when given."""
        if self.base_url:
            return Environment(name=self.environment, base_url=self.base_url)
        return Environment.from_name(self.environment)
