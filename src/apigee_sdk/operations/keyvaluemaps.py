"""Operations on environment-scoped key-value maps."""

from collections.abc import Mapping
from typing import Any

from .common import OperationsBase, endpoint, quote_segment, require, to_property_array


class KeyValueMapOperations(OperationsBase):
    """Key-value map listing, lookup and creation."""

    list_key_value_maps = endpoint(
        "keyvaluemap",
        "e/{env}/keyvaluemaps",
        doc="List the key-value map names of environment ``env``.",
    )
    get_key_value_map = endpoint(
        "keyvaluemap",
        "e/{env}/keyvaluemaps/{name}",
        args=("name", "env"),
        doc="Return key-value map ``name`` with its entries.",
    )

    async def create_key_value_map(
        self,
        name: str,
        env: str,
        entries: Mapping[str, Any],
        *,
        encrypted: bool = True,
    ) -> Any:
        """Create key-value map ``name`` in environment ``env`` holding ``entries``."""
        require("keyvaluemap", name=name, env=env)
        payload = {"name": name, "encrypted": encrypted, "entry": to_property_array(entries)}
        return await self.api.send(self.org_path(f"e/{quote_segment(env)}/keyvaluemaps"), "POST", {}, payload)


__all__ = ["KeyValueMapOperations"]
