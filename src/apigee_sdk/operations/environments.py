"""Operations on environments."""

from collections.abc import Mapping
from typing import Any

from .common import OperationsBase, endpoint, objectify, quote_segment, require, to_property_array


def _environment_payload(name: str, description: str | None, props: Mapping[str, Any] | None) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": name}
    if description is not None:
        payload["description"] = description
    payload["properties"] = {"property": to_property_array(props or {})}
    return payload


class EnvironmentOperations(OperationsBase):
    """Environment listing, creation and updates."""

    list_environments = endpoint("environment", "e", doc="List the environment names of the organization.")
    delete_environment = endpoint("environment", "e/{name}", "DELETE", doc="Delete environment ``name``.")

    async def get_environment(self, name: str) -> Any:
        """Return environment ``name`` with its properties flattened into a dict."""
        require("environment", name=name)
        data = await self.api.send(self.org_path(f"e/{quote_segment(name)}"))
        if isinstance(data, dict):
            properties = data.get("properties") or {}
            data["properties"] = objectify(properties.get("property") or [])
        return data

    async def create_environment(
        self,
        name: str,
        description: str = "",
        props: Mapping[str, Any] | None = None,
    ) -> Any:
        """Create environment ``name`` with the given properties."""
        require("environment", name=name)
        payload = _environment_payload(name, description, props)
        return await self.api.send(self.org_path("e"), "POST", {}, payload)

    async def update_environment(
        self,
        name: str,
        description: str | None = None,
        props: Mapping[str, Any] | None = None,
    ) -> Any:
        """Update the description and properties of environment ``name``."""
        require("environment", name=name)
        payload = _environment_payload(name, description, props)
        return await self.api.send(self.org_path(f"e/{quote_segment(name)}"), "POST", {}, payload)


__all__ = ["EnvironmentOperations"]
