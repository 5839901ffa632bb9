"""Operations on API products."""

from typing import Any

from .common import OperationsBase, bool_param, endpoint


class ApiProductOperations(OperationsBase):
    """API product listing and lookup."""

    get_api_product = endpoint("apiproduct", "apiproducts/{name}", doc="Return API product ``name``.")

    async def list_api_products(self, *, expand: bool = False) -> Any:
        """List API products; with ``expand`` the full product definitions are returned."""
        return await self.api.send(self.org_path(f"apiproducts?expand={bool_param(expand)}"))


__all__ = ["ApiProductOperations"]
