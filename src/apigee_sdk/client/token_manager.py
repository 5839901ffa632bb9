"""Token management utilities for the Apigee management API.

Access tokens come from the Apigee OAuth2 token endpoint. The first token is
obtained with the password grant; once a token is within
``EXPIRY_MARGIN_SECONDS`` of expiring it is renewed with the refresh grant, or
with the password grant when no refresh token was issued.
"""

import asyncio
import logging
import math
import time
from enum import StrEnum
from typing import Any

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..config import ApigeeConfig
from ..errors import TokenAcquisitionError
from .session import open_session, parse_response_body

logger = logging.getLogger("apigee_sdk.token_manager")

# Public client pair Apigee issues to its own command line tools
CLIENT_ID = "edgecli"
CLIENT_SECRET = "edgeclisecret"  # noqa: S105

EXPIRY_MARGIN_SECONDS = 30
HTTP_OK = 200

TOKEN_REQUEST_HEADERS = {
    "Content-Type": "application/x-www-form-urlencoded",
    "Accept": "application/json;charset=utf-8",
}


class GrantType(StrEnum):
    """OAuth2 grant types supported by the token endpoint."""

    PASSWORD = "password"
    REFRESH_TOKEN = "refresh_token"


class Token(BaseModel):
    """An access token with its absolute expiry in unix seconds.

    Any other fields returned by the token endpoint (``token_type``, ``scope``,
    ``jti``...) are kept as extra attributes. ``expires_in`` is consumed when the
    token is built and never stored.
    """

    model_config = ConfigDict(extra="allow")

    access_token: str
    refresh_token: str | None = None
    expiry_timestamp: int

    def is_valid_for(self, seconds: float) -> bool:
        """Return True if the token stays valid for at least ``seconds`` more."""
        return self.expiry_timestamp > time.time() + seconds


class TokenManager:
    """Manage bearer tokens for the Apigee API, regenerating when necessary."""

    def __init__(self, config: ApigeeConfig, *, http_client: httpx.AsyncClient | None = None) -> None:
        """Initialize the token manager.

        Args:
            config: The resolved Apigee configuration to use for authentication.
            http_client: Optional client to send token requests with. When omitted,
                each token request opens its own short-lived client.

        """
        self._config = config
        self._http_client = http_client
        self._token: Token | None = None
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def token(self) -> Token | None:
        """The current token, or None before the first acquisition."""
        return self._token

    @property
    def http_client(self) -> httpx.AsyncClient | None:
        """The client token requests are sent with, or None for a short-lived one per request."""
        return self._http_client

    @http_client.setter
    def http_client(self, client: httpx.AsyncClient | None) -> None:
        self._http_client = client

    def _ensure_lock(self) -> asyncio.Lock:
        """Return an asyncio lock bound to the current event loop.

        Creates a new lock if one does not exist or if the event loop has changed.
        """
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    def _cached(self) -> Token | None:
        token = self._token
        if token is not None and token.is_valid_for(EXPIRY_MARGIN_SECONDS):
            return token
        return None

    async def get_token(self) -> Token:
        """Return a token valid for at least the next 30 seconds.

        Regeneration is single-flight: concurrent callers wait on one request to
        the token endpoint and then share its result.
        """
        token = self._cached()
        if token is not None:
            return token

        async with self._ensure_lock():
            # Another caller may have regenerated while this one was waiting
            token = self._cached()
            if token is not None:
                return token
            return await self._renew()

    async def regenerate(self) -> Token:
        """Replace the current token regardless of its remaining lifetime."""
        async with self._ensure_lock():
            return await self._renew()

    async def _renew(self) -> Token:
        """Regenerate the token, preferring the refresh grant when possible."""
        if self._token is not None and self._token.refresh_token:
            try:
                return await self._generate_token(GrantType.REFRESH_TOKEN)
            except TokenAcquisitionError as exc:
                logger.warning("Refresh grant failed (%s); falling back to the password grant.", exc)
        return await self._generate_token(GrantType.PASSWORD)

    async def _generate_token(self, grant_type: GrantType = GrantType.PASSWORD) -> Token:
        """Request a new token from the token endpoint and cache it.

        Args:
            grant_type: The OAuth2 grant to use.

        Returns:
            The newly issued token.

        Raises:
            TokenAcquisitionError: If the endpoint cannot be reached, answers with a
                status other than 200, or returns an unusable body.

        """
        form = {"grant_type": grant_type.value}
        if grant_type is GrantType.PASSWORD:
            form["username"] = self._config.username
            form["password"] = self._config.password
        else:
            if self._token is None or not self._token.refresh_token:
                msg = "No refresh token available for the refresh grant."
                raise TokenAcquisitionError(None, msg)
            form["refresh_token"] = self._token.refresh_token

        try:
            response = await self._request_token(form)
        except httpx.HTTPError as exc:
            logger.exception("Failed to reach the Apigee token endpoint")
            msg = f"Network error while requesting a token: {exc}"
            raise TokenAcquisitionError(None, msg) from exc

        body = parse_response_body(response)
        if response.status_code != HTTP_OK:
            logger.error("Token request (%s grant) failed with HTTP %s", grant_type.value, response.status_code)
            raise TokenAcquisitionError(response.status_code, response.reason_phrase, body)

        token = self._build_token(body)
        self._token = token
        logger.debug("New access token generated with the %s grant.", grant_type.value)
        return token

    async def _request_token(self, form: dict[str, str]) -> httpx.Response:
        """POST the form-encoded grant to the token endpoint."""
        async with open_session(self._config, self._http_client) as client:
            return await client.post(
                self._config.token_url_str,
                data=form,
                auth=(CLIENT_ID, CLIENT_SECRET),
                headers=TOKEN_REQUEST_HEADERS,
            )

    @staticmethod
    def _build_token(body: Any) -> Token:
        """Turn a token endpoint payload into a ``Token`` with an absolute expiry."""
        if not isinstance(body, dict) or not isinstance(body.get("access_token"), str):
            msg = "Token response did not include an access token."
            raise TokenAcquisitionError(HTTP_OK, msg, body)

        data = dict(body)
        expires_in = data.pop("expires_in", None)
        try:
            lifetime = float(expires_in)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            msg = "Token response did not include a numeric expires_in."
            raise TokenAcquisitionError(HTTP_OK, msg, body) from exc
        if not math.isfinite(lifetime):
            msg = "Token response did not include a numeric expires_in."
            raise TokenAcquisitionError(HTTP_OK, msg, body)

        data["expiry_timestamp"] = math.floor(time.time() + lifetime)
        try:
            return Token.model_validate(data)
        except PydanticValidationError as exc:
            msg = f"Token response could not be parsed: {exc.error_count()} invalid field(s)."
            raise TokenAcquisitionError(HTTP_OK, msg, body) from exc


__all__ = ["CLIENT_ID", "CLIENT_SECRET", "EXPIRY_MARGIN_SECONDS", "GrantType", "Token", "TokenManager"]
