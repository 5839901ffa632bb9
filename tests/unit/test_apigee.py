"""Unit tests for the Apigee facade wiring, exercised end to end over a mocked transport."""

import json

import httpx
import pytest

from apigee_sdk.apigee import Apigee
from apigee_sdk.client.api_client import ApiClient
from apigee_sdk.config import ApigeeConfig
from apigee_sdk.errors import ApiRequestError, ConfigurationError, ValidationError


class _FakeApigee:
    """Mock transport answering the token endpoint and recording API calls."""

    def __init__(self, api_response: httpx.Response) -> None:
        self.api_response = api_response
        self.token_requests: list[httpx.Request] = []
        self.api_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/oauth/token":
            self.token_requests.append(request)
            return httpx.Response(200, json={"access_token": "tok-1", "refresh_token": "ref-1", "expires_in": 1799})
        self.api_requests.append(request)
        return self.api_response


def _apigee(fake: _FakeApigee) -> Apigee:
    config = ApigeeConfig(org="myorg", username="user", password="pass")
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(fake))
    return Apigee(config, api=ApiClient(config, http_client=http_client))


@pytest.mark.asyncio
async def test_create_empty_proxy_over_the_wire() -> None:
    """create_empty_proxy should POST the JSON name with a bearer token."""
    fake = _FakeApigee(httpx.Response(201, json={"name": "valid-name_1", "revision": []}))
    apigee = _apigee(fake)

    result = await apigee.create_empty_proxy("valid-name_1")

    assert result == {"name": "valid-name_1", "revision": []}
    request = fake.api_requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.enterprise.apigee.com/v1/o/myorg/apis"
    assert json.loads(request.content) == {"name": "valid-name_1"}
    assert request.headers["authorization"] == "Bearer tok-1"


@pytest.mark.asyncio
async def test_invalid_proxy_name_makes_no_request() -> None:
    """Validation failures should not reach the token or API endpoints."""
    fake = _FakeApigee(httpx.Response(201, json={}))
    apigee = _apigee(fake)

    with pytest.raises(ValidationError):
        await apigee.create_empty_proxy("bad name!")

    assert fake.token_requests == []
    assert fake.api_requests == []


@pytest.mark.asyncio
async def test_token_reused_across_calls() -> None:
    """Several calls should share one token acquisition."""
    fake = _FakeApigee(httpx.Response(200, json=["orders"]))
    apigee = _apigee(fake)

    await apigee.list_proxies()
    await apigee.list_environments()
    await apigee.list_shared_flows()

    assert len(fake.token_requests) == 1
    assert len(fake.api_requests) == 3


@pytest.mark.asyncio
async def test_api_error_surfaces_from_facade() -> None:
    """A 404 from the API should raise ApiRequestError through the facade."""
    fake = _FakeApigee(httpx.Response(404, json={"message": "APIProxy named missing does not exist"}))
    apigee = _apigee(fake)

    with pytest.raises(ApiRequestError) as exc_info:
        await apigee.get_proxy("missing")

    assert exc_info.value.status == 404


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """from_env should build the config and dispatcher from the environment."""
    monkeypatch.setenv("APIGEE_ORGANIZATION", "envorg")
    monkeypatch.setenv("APIGEE_USERNAME", "user")
    monkeypatch.setenv("APIGEE_PASSWORD", "pass")
    monkeypatch.delenv("APIGEE_BASE_URL", raising=False)
    monkeypatch.delenv("APIGEE_TOKEN_URL", raising=False)

    apigee = Apigee.from_env()

    assert apigee.org == "envorg"
    assert apigee.org_path("apis") == "v1/o/envorg/apis"
    assert isinstance(apigee.api, ApiClient)


def test_from_env_missing_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """from_env should fail before any network use when credentials are missing."""
    monkeypatch.setenv("APIGEE_ORGANIZATION", "envorg")
    monkeypatch.delenv("APIGEE_USERNAME", raising=False)
    monkeypatch.delenv("APIGEE_PASSWORD", raising=False)

    with pytest.raises(ConfigurationError):
        Apigee.from_env()


@pytest.mark.asyncio
async def test_context_manager_delegates_to_dispatcher() -> None:
    """Entering the facade should open the dispatcher's shared client."""
    apigee = Apigee(ApigeeConfig(org="myorg", username="user", password="pass"))

    async with apigee as entered:
        assert entered is apigee
        assert apigee.api._http_client is not None  # type: ignore[reportPrivateUsage]

    assert apigee.api._http_client is None  # type: ignore[reportPrivateUsage]
