"""Operations on API proxies and their revisions."""

import asyncio
import logging
from pathlib import Path
from typing import Any

from ..errors import ValidationError
from .common import (
    OperationsBase,
    bool_param,
    endpoint,
    quote_segment,
    require,
    validate_name,
)

logger = logging.getLogger("apigee_sdk.operations.proxies")

FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class ProxyOperations(OperationsBase):
    """API proxy management: create, import, download, undeploy, delete."""

    list_proxies = endpoint("proxy", "apis", doc="List the names of all API proxies in the organization.")
    list_proxy_revisions = endpoint(
        "proxy",
        "apis/{name}/revisions",
        doc="List the revision numbers of proxy ``name``.",
    )
    download_proxy = endpoint(
        "proxy",
        "apis/{name}/revisions/{revision}?format=bundle",
        doc="Download the bundle of a proxy revision as zip bytes.",
    )
    undeploy_proxy_revision = endpoint(
        "proxy",
        "apis/{name}/revisions/{revision}/deployments",
        "DELETE",
        doc="Undeploy one revision of proxy ``name``.",
    )

    async def create_empty_proxy(self, name: str) -> Any:
        """Create a proxy with no revisions.

        Raises:
            ValidationError: If ``name`` is not made of letters, digits, ``-`` and ``_``.

        """
        validate_name("proxy", name)
        return await self.api.send(self.org_path("apis"), "POST", {}, {"name": name})

    async def get_proxy(self, name: str, revision: str | int | None = None) -> Any:
        """Return proxy ``name``, or one of its revisions when ``revision`` is given."""
        return await self._get_or_delete_proxy(name, "GET", revision)

    async def delete_proxy(self, name: str, revision: str | int | None = None) -> Any:
        """Delete proxy ``name``, or only one of its revisions when ``revision`` is given."""
        return await self._get_or_delete_proxy(name, "DELETE", revision)

    async def _get_or_delete_proxy(self, name: str, method: str, revision: str | int | None) -> Any:
        require("proxy", name=name)
        path = f"apis/{quote_segment(name)}"
        if revision is not None and revision != "":
            path += f"/revisions/{quote_segment(revision)}"
        return await self.api.send(self.org_path(path), method)

    async def import_proxy(self, name: str, file_path: str | Path, *, validate: bool = True) -> Any:
        """Upload a zipped proxy bundle as a new revision of proxy ``name``.

        Args:
            name: Proxy name; created if it does not exist yet.
            file_path: Path to the zip bundle on disk.
            validate: Ask Apigee to validate the bundle before accepting it.

        """
        validate_name("proxy", name)
        bundle = Path(file_path)
        if not bundle.is_file():
            raise ValidationError("proxy", "file_path")
        path = f"apis?action=import&name={quote_segment(name)}&validate={bool_param(validate)}"
        content = await asyncio.to_thread(bundle.read_bytes)
        files = {"file": (bundle.name, content, "application/octet-stream")}
        return await self.api.send(self.org_path(path), "POST", files=files)

    async def undeploy_proxy(self, name: str) -> list[Any]:
        """Undeploy every revision of proxy ``name``, one after the other."""
        revisions = await self.list_proxy_revisions(name=name)
        results = []
        for revision in revisions:
            logger.debug("Undeploying revision %s of proxy %s", revision, name)
            results.append(await self.undeploy_proxy_revision(name=name, revision=revision))
        return results

    async def force_undeploy_proxy_revision(self) -> None:
        """Not implemented yet; always resolves to None."""
        return None

    async def install_node_dependencies(self, name: str, revision: str | int) -> Any:
        """Run ``npm install`` for a Node.js proxy revision."""
        if not name or revision is None or revision == "":
            raise ValidationError("installNodeDependencies", "name or revision")
        path = f"apis/{quote_segment(name)}/revisions/{quote_segment(revision)}/npm"
        return await self.api.send(self.org_path(path), "POST", FORM_HEADERS, {"command": "install"})


__all__ = ["ProxyOperations"]
