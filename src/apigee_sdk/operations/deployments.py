"""Operations reporting where proxies are deployed."""

from .common import OperationsBase, endpoint


class DeploymentOperations(OperationsBase):
    """Deployment status queries for proxies, environments and the organization."""

    proxy_revision_deployments = endpoint(
        "deployment",
        "apis/{name}/revisions/{revision}/deployments",
        doc="List the environments a proxy revision is deployed to.",
    )
    proxy_deployments = endpoint(
        "deployment",
        "apis/{name}/deployments",
        doc="List the deployments of every revision of proxy ``name``.",
    )
    proxy_deployments_for_environment = endpoint(
        "deployment",
        "e/{env}/apis/{apiproxy}/deployments",
        args=("apiproxy", "env"),
        doc="List the deployments of proxy ``apiproxy`` in environment ``env``.",
    )
    all_proxy_deployments_for_environment = endpoint(
        "deployment",
        "deployments",
        doc="List the deployments of every proxy in the organization.",
    )
    proxy_deployments_for_org = endpoint(
        "deployment",
        "deployments?includeServerStatus=false&includeApiConfig=false",
        doc="List organization-wide deployments without server status or API configuration.",
    )
    get_environment_deployments = endpoint(
        "deployment",
        "e/{name}/deployments",
        doc="List the proxies and shared flows deployed to environment ``name``.",
    )


__all__ = ["DeploymentOperations"]
