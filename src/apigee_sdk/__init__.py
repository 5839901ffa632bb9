"""Apigee management API client package.

An asynchronous client for the Apigee Edge management API. ``Apigee`` exposes
the resource operations; ``ApigeeConfig`` holds the connection settings.
"""

from .apigee import Apigee
from .client.api_client import ApiClient
from .client.token_manager import Token, TokenManager
from .config import ApigeeConfig
from .errors import (
    ApiConnectionError,
    ApigeeError,
    ApiRequestError,
    ConfigurationError,
    TokenAcquisitionError,
    ValidationError,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiConnectionError",
    "ApiRequestError",
    "Apigee",
    "ApigeeConfig",
    "ApigeeError",
    "ConfigurationError",
    "Token",
    "TokenAcquisitionError",
    "TokenManager",
    "ValidationError",
]
