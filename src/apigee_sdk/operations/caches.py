"""Operations on environment-scoped caches."""

from collections.abc import Mapping
from typing import Any

from .common import OperationsBase, endpoint, quote_segment, require


class CacheOperations(OperationsBase):
    """Cache definitions and cache entry clearing."""

    list_caches = endpoint("cache", "e/{env}/caches", doc="List the caches of environment ``env``.")
    get_cache = endpoint(
        "cache",
        "e/{env}/caches/{name}",
        args=("name", "env"),
        doc="Return the definition of cache ``name``.",
    )
    create_cache = endpoint(
        "cache",
        "e/{env}/caches/{name}",
        "POST",
        body="properties",
        args=("name", "env", "properties"),
        doc="Create cache ``name`` in environment ``env`` from ``properties``.",
    )
    delete_cache = endpoint(
        "cache",
        "e/{env}/caches/{name}",
        "DELETE",
        args=("name", "env"),
        doc="Delete cache ``name``.",
    )
    clear_cache = endpoint(
        "cache",
        "e/{env}/caches/{name}/entries?action=clear",
        "POST",
        headers={"Content-Type": "application/octet-stream"},
        args=("name", "env"),
        doc="Remove every entry from cache ``name``.",
    )
    clear_cache_entry = endpoint(
        "cache",
        "e/{env}/caches/{name}/entries/{cache_key}?action=clear",
        "POST",
        args=("name", "env", "cache_key"),
        doc="Remove the entry stored under ``cache_key`` from cache ``name``.",
    )

    async def update_cache(
        self,
        name: str,
        env: str,
        properties: Mapping[str, Any],
        *,
        preserve_properties: bool = True,
    ) -> Any:
        """Update cache ``name``.

        With ``preserve_properties`` the current definition is fetched first and
        ``properties`` is laid over it, so unspecified settings keep their value.
        """
        require("cache", name=name, env=env)
        props: dict[str, Any] = dict(properties)
        if preserve_properties:
            current = await self.get_cache(name=name, env=env)
            if isinstance(current, dict):
                props = {**current, **props}
        path = f"e/{quote_segment(env)}/caches/{quote_segment(name)}"
        return await self.api.send(self.org_path(path), "PUT", {}, props)


__all__ = ["CacheOperations"]
