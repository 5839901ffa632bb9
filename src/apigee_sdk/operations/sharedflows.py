"""Operations on shared flows."""

from .common import OperationsBase, endpoint


class SharedFlowOperations(OperationsBase):
    """Shared flow listing and bundle download."""

    list_shared_flows = endpoint("sharedflow", "sharedflows", doc="List the shared flow names of the organization.")
    download_shared_flow = endpoint(
        "sharedflow",
        "sharedflows/{name}/revisions/{revision}?format=bundle",
        doc="Download the bundle of a shared flow revision as zip bytes.",
    )


__all__ = ["SharedFlowOperations"]
