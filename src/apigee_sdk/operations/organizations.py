"""Operations on the organization itself."""

from .common import OperationsBase, endpoint


class OrganizationOperations(OperationsBase):
    """Organization details."""

    get_org = endpoint("organization", "", doc="Return the details of the configured organization.")


__all__ = ["OrganizationOperations"]
