"""Unit tests for the HTTP helpers in client.session."""

import httpx
import pytest

from apigee_sdk.client.session import create_http_client, open_session, parse_response_body
from apigee_sdk.config import ApigeeConfig


def _config(**overrides: object) -> ApigeeConfig:
    return ApigeeConfig(org="myorg", username="user", password="pass", **overrides)


class TestCreateHttpClient:
    """Tests for create_http_client."""

    @pytest.mark.asyncio
    async def test_default_timeout_is_httpx_default(self) -> None:
        """Without timeout_ms the httpx default timeout should apply."""
        async with create_http_client(_config()) as client:
            assert client.timeout == httpx.Timeout(5.0)

    @pytest.mark.asyncio
    async def test_configured_timeout(self) -> None:
        """timeout_ms should be converted to seconds."""
        async with create_http_client(_config(timeout_ms=15000)) as client:
            assert client.timeout == httpx.Timeout(15.0)

    @pytest.mark.asyncio
    async def test_overrides_are_forwarded(self) -> None:
        """Extra keyword arguments should reach httpx.AsyncClient."""
        async with create_http_client(_config(), headers={"User-Agent": "apigee-sdk-tests"}) as client:
            assert client.headers["user-agent"] == "apigee-sdk-tests"

    @pytest.mark.asyncio
    async def test_proxy_setting_accepted(self) -> None:
        """An outbound proxy should be accepted when building the client."""
        async with create_http_client(_config(proxy="http://proxy.internal:3128")) as client:
            assert not client.is_closed


class TestOpenSession:
    """Tests for open_session."""

    @pytest.mark.asyncio
    async def test_given_client_is_yielded_and_left_open(self) -> None:
        """A provided client should be used as-is and not closed."""
        given = httpx.AsyncClient()

        async with open_session(_config(), given) as client:
            assert client is given

        assert not given.is_closed
        await given.aclose()

    @pytest.mark.asyncio
    async def test_owned_client_is_closed(self) -> None:
        """Without a provided client a temporary one should be opened and closed."""
        async with open_session(_config()) as client:
            owned = client
            assert not owned.is_closed

        assert owned.is_closed


class TestParseResponseBody:
    """Tests for parse_response_body."""

    def test_json(self) -> None:
        """JSON bodies should be decoded."""
        assert parse_response_body(httpx.Response(200, json={"a": 1})) == {"a": 1}

    def test_vendor_json(self) -> None:
        """Any JSON media type should be decoded."""
        response = httpx.Response(200, content=b'["x"]', headers={"content-type": "application/vnd.api+json"})
        assert parse_response_body(response) == ["x"]

    def test_invalid_json_falls_back_to_text(self) -> None:
        """A body claiming JSON but failing to parse should come back as text."""
        response = httpx.Response(200, content=b"not json", headers={"content-type": "application/json"})
        assert parse_response_body(response) == "not json"

    def test_text(self) -> None:
        """Text bodies should be returned as str."""
        assert parse_response_body(httpx.Response(200, text="hello")) == "hello"

    def test_empty(self) -> None:
        """An empty body should be an empty dict."""
        assert parse_response_body(httpx.Response(204)) == {}

    def test_binary(self) -> None:
        """Other media types should be returned as bytes."""
        response = httpx.Response(200, content=b"\x00\x01", headers={"content-type": "application/zip"})
        assert parse_response_body(response) == b"\x00\x01"
