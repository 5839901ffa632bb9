"""Authenticated request dispatch for the Apigee management API.

``ApiClient`` sends one request per ``send`` call: it asks the token manager
for a valid bearer token, issues the request against the configured base URL
and classifies the response status.
"""

import logging
from collections.abc import Mapping
from types import TracebackType
from typing import Any, Self

import httpx

from ..config import ApigeeConfig
from ..errors import ApiConnectionError, ApiRequestError
from .session import create_http_client, open_session, parse_response_body
from .token_manager import TokenManager

logger = logging.getLogger("apigee_sdk.api_client")

# HTTP status codes
HTTP_OK = 200
HTTP_ACCEPTED = 202
HTTP_BAD_REQUEST = 400

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def _content_type(headers: Mapping[str, str]) -> str:
    for key, value in headers.items():
        if key.lower() == "content-type":
            return value.lower()
    return ""


def encode_body(headers: Mapping[str, str], body: Any) -> dict[str, Any]:
    """Map a request body onto the matching ``httpx`` request keyword.

    Args:
        headers: Caller headers; a form ``Content-Type`` selects form encoding.
        body: ``None`` for no body, raw ``bytes``/``str``, or a JSON-serialisable value.

    Returns:
        Keyword arguments for ``httpx.AsyncClient.request``.

    """
    if body is None:
        return {}
    if isinstance(body, (bytes, str)):
        return {"content": body}
    if isinstance(body, Mapping) and _content_type(headers).startswith(FORM_CONTENT_TYPE):
        return {"data": dict(body)}
    return {"json": body}


class ApiClient:
    """Send bearer-authenticated requests to the Apigee management API."""

    def __init__(
        self,
        config: ApigeeConfig,
        *,
        token_manager: TokenManager | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the API client.

        Args:
            config: The resolved Apigee configuration.
            token_manager: Token manager to authenticate with; one is created from
                ``config`` when omitted.
            http_client: Optional client to send requests with. When omitted, a
                client is opened per ``async with`` block, or per call outside one.

        """
        self._config = config
        self._http_client = http_client
        self._owns_client = False
        self._owns_token_manager = token_manager is None
        self.token_manager = token_manager or TokenManager(config, http_client=http_client)

    async def __aenter__(self) -> Self:
        """Open a shared HTTP client for the duration of the block.

        A token manager created by this client sends its token requests over the
        same shared client.
        """
        if self._http_client is None:
            self._http_client = create_http_client(self._config)
            self._owns_client = True
            if self._owns_token_manager:
                self.token_manager.http_client = self._http_client
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Close the shared HTTP client if this instance opened it."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client opened by ``__aenter__``; safe to call repeatedly."""
        if self._owns_client and self._http_client is not None:
            if self._owns_token_manager:
                self.token_manager.http_client = None
            await self._http_client.aclose()
            self._http_client = None
            self._owns_client = False

    def build_url(self, path: str) -> str:
        """Join ``path`` (which may carry a query string) onto the base URL."""
        return f"{self._config.base_url_str}/{path.lstrip('/')}"

    async def send(
        self,
        path: str,
        method: str = "get",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        *,
        files: Mapping[str, Any] | None = None,
    ) -> Any:
        """Perform one authenticated API call and classify the outcome.

        Args:
            path: Path relative to the base URL, e.g. ``v1/o/myorg/apis``.
            method: HTTP verb, case-insensitive.
            headers: Extra request headers. ``Authorization`` is always set by the client.
            body: Request body; see ``encode_body``.
            files: Multipart file fields, as accepted by ``httpx``.

        Returns:
            The parsed body for 200-202 responses, ``{}`` for any other non-error status.

        Raises:
            TokenAcquisitionError: If no access token could be obtained.
            ApiRequestError: If the API answers with a status of 400 or above.
            ApiConnectionError: If the API cannot be reached.

        """
        token = await self.get_token_value()
        # The bearer token always wins over a caller-supplied Authorization header
        caller_headers = {key: value for key, value in (headers or {}).items() if key.lower() != "authorization"}
        request_headers = {**caller_headers, "Authorization": f"Bearer {token}"}
        url = self.build_url(path)
        verb = method.upper()
        request_kwargs = encode_body(caller_headers, body)
        if files is not None:
            request_kwargs["files"] = files

        logger.debug("%s %s headers=%s", verb, url, sorted(caller_headers))
        try:
            async with open_session(self._config, self._http_client) as client:
                response = await client.request(verb, url, headers=request_headers, **request_kwargs)
        except httpx.HTTPError as exc:
            msg = f"Network error during {verb} {url}: {exc}"
            raise ApiConnectionError(msg) from exc

        return self._classify(response)

    async def get_token_value(self) -> str:
        """Return the current access token string, regenerating it if needed."""
        token = await self.token_manager.get_token()
        return token.access_token

    @staticmethod
    def _classify(response: httpx.Response) -> Any:
        """Turn a response into data or an ``ApiRequestError``."""
        status = response.status_code
        if status >= HTTP_BAD_REQUEST:
            body = parse_response_body(response)
            logger.debug(
                "API request failed: %s %s -> %s %s, headers=%s, body=%r",
                response.request.method,
                response.request.url,
                status,
                response.reason_phrase,
                dict(response.headers),
                body,
            )
            raise ApiRequestError(status, response.reason_phrase, body)
        if HTTP_OK <= status <= HTTP_ACCEPTED:
            data = parse_response_body(response)
            logger.debug("Response data: %r", data)
            return data
        # Other non-error statuses (203-399) carry no usable payload for callers
        logger.debug("Ignoring body of HTTP %s response from %s", status, response.request.url)
        return {}


__all__ = ["ApiClient", "encode_body"]
