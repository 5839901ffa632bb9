"""HTTP session setup for the Apigee management API.

Provides the factory that builds an ``httpx.AsyncClient`` with the shared
transport settings (TLS verification, timeout and outbound proxy) taken from
``ApigeeConfig``, plus small helpers shared by the token manager and the API
client.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import httpx

from ..config import ApigeeConfig


def create_http_client(config: ApigeeConfig, **overrides: Any) -> httpx.AsyncClient:
    """Create an HTTP client configured for the Apigee management API.

    The returned client is an async context manager; callers own its lifetime.

    Args:
        config: The configuration containing TLS verification, timeout and proxy settings.
        **overrides: Extra keyword arguments passed straight to ``httpx.AsyncClient``.

    Returns:
        A new, unopened ``httpx.AsyncClient``.

    """
    options: dict[str, Any] = {"verify": config.verify_ssl}
    # Without an explicit timeout the httpx default applies
    if config.timeout_ms is not None:
        options["timeout"] = httpx.Timeout(config.timeout_ms / 1000)
    if config.proxy is not None:
        options["proxy"] = str(config.proxy)
    options.update(overrides)
    return httpx.AsyncClient(**options)


@asynccontextmanager
async def open_session(
    config: ApigeeConfig,
    client: httpx.AsyncClient | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield ``client`` when given, otherwise a short-lived client closed on exit."""
    if client is not None:
        yield client
        return
    async with create_http_client(config) as owned:
        yield owned


def parse_response_body(response: httpx.Response) -> Any:
    """Decode a response body according to its content type.

    Returns:
        Parsed JSON for JSON responses, text for ``text/*``, raw bytes for anything
        else, and an empty dict when there is no body at all.

    """
    if not response.content:
        return {}
    content_type = response.headers.get("content-type", "")
    if "json" in content_type:
        try:
            return response.json()
        except ValueError:
            return response.text
    if content_type.startswith("text/"):
        return response.text
    return response.content


__all__ = ["create_http_client", "open_session", "parse_response_body"]
