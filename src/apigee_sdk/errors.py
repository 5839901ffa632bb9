"""Exception types raised by the Apigee management client.

Callers can catch ``ApigeeError`` for any failure, or the specific subclasses to
tell configuration problems, rejected input, authentication failures and API
errors apart.
"""

from typing import Any


class ApigeeError(Exception):
    """Base exception for all Apigee client errors."""


class ConfigurationError(ApigeeError):
    """Raised when the connection settings are missing or invalid."""


class ValidationError(ApigeeError):
    """Raised when a facade method receives malformed input.

    No network call is made when this is raised.
    """

    def __init__(self, resource: str, parameter: str) -> None:
        self.resource = resource
        self.parameter = parameter
        super().__init__(f"The {resource} {parameter} is not valid or it was not specified properly")


class _HttpStatusError(ApigeeError):
    """Common shape for errors carrying an HTTP status, message and raw body."""

    def __init__(self, status: int | None, message: str, body: Any = None) -> None:
        self.status = status
        self.message = message
        self.body = body
        super().__init__(f"{status}: {message}" if status is not None else message)


class TokenAcquisitionError(_HttpStatusError):
    """Raised when the token endpoint does not issue an access token."""


class ApiRequestError(_HttpStatusError):
    """Raised when a management API call returns an error status (>= 400)."""


class ApiConnectionError(ApigeeError):
    """Raised when the management API cannot be reached."""


__all__ = [
    "ApiConnectionError",
    "ApiRequestError",
    "ApigeeError",
    "ConfigurationError",
    "TokenAcquisitionError",
    "ValidationError",
]
