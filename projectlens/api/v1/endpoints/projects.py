"""
Project discovery routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from projectlens.api.dependencies.auth import NotFoundError
from projectlens.api.dependencies.discovery import (DiscoveryContext,
                                                    get_discovery_context,
                                                    unique_projects)
from projectlens.api.responses.projects import ProjectList
from projectlens.core.logging import get_logger

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "/projects",
    response_model=ProjectList,
    summary="List Projects",
    description="List the projects visible to the current user across clusters",
)
def list_projects(
    cluster: Optional[str] = Query(
        None, description="Only consider cluster objects in this namespace"
    ),
    unique: bool = Query(False, description="Drop repeated projects"),
    discovery: DiscoveryContext = Depends(get_discovery_context),
) -> ProjectList:
    projects = discovery.list_projects(cluster=cluster)
    if unique:
        projects = unique_projects(projects)

    logger.info(
        "Projects listed",
        extra={
            "user_id": discovery.user.id,
            "project_count": len(projects),
        },
    )
    return ProjectList.from_views(projects)


@router.get(
    "/clusters/{namespace}/{name}/projects",
    response_model=ProjectList,
    summary="List Cluster Projects",
    description="List the projects visible to the current user in one cluster object",
)
def list_cluster_projects(
    namespace: str,
    name: str,
    unique: bool = Query(False, description="Drop repeated projects"),
    discovery: DiscoveryContext = Depends(get_discovery_context),
) -> ProjectList:
    obj = discovery.cluster_objects.get(namespace, name)
    if obj is None:
        raise NotFoundError(f"Cluster object {namespace}/{name} not found")

    projects = discovery.resolver.list_projects(
        namespace, name, obj, discovery.identity
    )
    if unique:
        projects = unique_projects(projects)
    return ProjectList.from_views(projects)
