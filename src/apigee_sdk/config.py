"""Configuration management for the Apigee management client.

This module defines the ``ApigeeConfig`` model and a helper to load it from
environment variables. Validation failures surface as ``ConfigurationError``
before any network use.
"""

import os
from typing import Any, Self

from dotenv import load_dotenv
from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from .errors import ConfigurationError

# Load variables from a local .env file for development convenience
load_dotenv()

DEFAULT_BASE_URL = "https://api.enterprise.apigee.com"
DEFAULT_TOKEN_URL = "https://login.apigee.com/oauth/token"


def _format_errors(exc: PydanticValidationError) -> str:
    messages = "; ".join(f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors())
    return f"Invalid Apigee configuration: {messages}"


class ApigeeConfig(BaseModel):
    """Connection settings required to talk to an Apigee organization."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    org: str = Field(min_length=1)
    username: str = Field(min_length=1)
    password: str = Field(min_length=1, repr=False)
    base_url: AnyHttpUrl = Field(default=DEFAULT_BASE_URL, validate_default=True)
    token_url: AnyHttpUrl = Field(default=DEFAULT_TOKEN_URL, validate_default=True)
    verify_ssl: bool = True
    timeout_ms: int | None = Field(default=None, ge=1000, le=600000)
    proxy: AnyHttpUrl | None = None

    def __init__(self, **data: Any) -> None:
        """Validate the settings, raising ``ConfigurationError`` on failure."""
        try:
            super().__init__(**data)
        except PydanticValidationError as exc:
            raise ConfigurationError(_format_errors(exc)) from exc

    @property
    def base_url_str(self) -> str:
        """Return the management API base URL without a trailing slash."""
        return str(self.base_url).rstrip("/")

    @property
    def token_url_str(self) -> str:
        """Return the token endpoint URL as a plain string."""
        return str(self.token_url)

    @classmethod
    def from_env(cls) -> Self:
        """Build a configuration object from environment variables."""
        required = {
            "org": "APIGEE_ORGANIZATION",
            "username": "APIGEE_USERNAME",
            "password": "APIGEE_PASSWORD",
        }
        raw_config: dict[str, Any] = {field: os.getenv(env_name) for field, env_name in required.items()}
        missing = [required[field] for field, value in raw_config.items() if not value]
        if missing:
            msg = f"Missing environment variables: {', '.join(missing)}"
            raise ConfigurationError(msg)

        optional = {
            "base_url": os.getenv("APIGEE_BASE_URL"),
            "token_url": os.getenv("APIGEE_TOKEN_URL"),
            "verify_ssl": os.getenv("APIGEE_VERIFY_SSL"),
            "timeout_ms": os.getenv("APIGEE_TIMEOUT_MS"),
            "proxy": os.getenv("APIGEE_PROXY"),
        }
        # Unset variables fall back to the model defaults
        raw_config.update({key: value for key, value in optional.items() if value})
        return cls(**raw_config)


__all__ = ["DEFAULT_BASE_URL", "DEFAULT_TOKEN_URL", "ApigeeConfig"]
