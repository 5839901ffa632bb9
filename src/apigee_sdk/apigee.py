"""The ``Apigee`` facade: one object exposing every resource operation.

Usage::

    async with Apigee.from_env() as apigee:
        proxies = await apigee.list_proxies()
        await apigee.create_empty_proxy("orders-v2")
        caches = await apigee.list_caches(env="test")

Table-driven operations take their path parameters as keyword arguments.
"""

from types import TracebackType
from typing import Self

from .client.api_client import ApiClient
from .config import ApigeeConfig
from .operations.caches import CacheOperations
from .operations.deployments import DeploymentOperations
from .operations.environments import EnvironmentOperations
from .operations.keyvaluemaps import KeyValueMapOperations
from .operations.organizations import OrganizationOperations
from .operations.products import ApiProductOperations
from .operations.proxies import ProxyOperations
from .operations.sharedflows import SharedFlowOperations


class Apigee(
    ProxyOperations,
    EnvironmentOperations,
    DeploymentOperations,
    CacheOperations,
    KeyValueMapOperations,
    SharedFlowOperations,
    ApiProductOperations,
    OrganizationOperations,
):
    """Client for the management API of one Apigee organization."""

    def __init__(self, config: ApigeeConfig, *, api: ApiClient | None = None) -> None:
        """Initialize the facade.

        Args:
            config: The validated connection settings.
            api: Request dispatcher to use; one is built from ``config`` when omitted.

        """
        self.config = config
        self.org = config.org
        self.api = api or ApiClient(config)

    @classmethod
    def from_env(cls) -> Self:
        """Build a client from ``APIGEE_*`` environment variables."""
        return cls(ApigeeConfig.from_env())

    async def __aenter__(self) -> Self:
        """Share one HTTP connection pool across the calls made inside the block."""
        await self.api.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Release the HTTP connection pool."""
        await self.api.__aexit__(exc_type, exc, tb)


__all__ = ["Apigee"]
