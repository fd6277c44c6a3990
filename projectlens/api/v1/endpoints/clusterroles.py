"""
ClusterRole capability routes
"""

from fastapi import APIRouter, Depends, Query

from projectlens.api.dependencies.auth import NotFoundError, get_current_user
from projectlens.api.dependencies.discovery import get_cluster_roles
from projectlens.api.responses.projects import Capability, RoleCapabilities
from projectlens.models.auth import User
from projectlens.repositories.kubernetes import ClusterRoleRepository
from projectlens.services.rules import capabilities_for_role

router = APIRouter()


@router.get(
    "/clusterroles/{name}/capabilities",
    response_model=RoleCapabilities,
    summary="ClusterRole Capabilities",
    description="Resource names a ClusterRole may view and administer",
)
def get_role_capabilities(
    name: str,
    resource: str = Query(..., description="Resource type, e.g. virtualmachines"),
    group: str = Query("", description="API group of the resource"),
    user: User = Depends(get_current_user),
    cluster_roles: ClusterRoleRepository = Depends(get_cluster_roles),
) -> RoleCapabilities:
    rules = cluster_roles.get_rules(name)
    if rules is None:
        raise NotFoundError(f"ClusterRole {name} not found")

    capabilities = capabilities_for_role(rules, group, resource)
    return RoleCapabilities(
        role=name,
        group=group,
        resource=resource,
        view=Capability.from_result(capabilities["view"]),
        admin=Capability.from_result(capabilities["admin"]),
    )
