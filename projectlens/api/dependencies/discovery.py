"""Discovery dependencies and utilities for endpoints."""

from typing import Any, Dict, Iterable, List, Optional

from fastapi import Depends

from projectlens.api.dependencies.auth import get_current_user
from projectlens.core.logging import get_logger
from projectlens.models.auth import User
from projectlens.models.rbac import ProjectView
from projectlens.repositories.kubernetes import (ClusterObjectRepository,
                                                 ClusterRoleRepository,
                                                 get_cluster_object_repository,
                                                 get_cluster_role_repository)
from projectlens.services.projects import (ProjectResolver,
                                           create_project_resolver)

logger = get_logger(__name__)


def get_project_resolver() -> ProjectResolver:
    return create_project_resolver()


def get_cluster_objects() -> ClusterObjectRepository:
    return get_cluster_object_repository()


def get_cluster_roles() -> ClusterRoleRepository:
    return get_cluster_role_repository()


def object_key(obj: Dict[str, Any]) -> Optional[tuple]:
    """``(namespace, name)`` of a cluster object, or None without metadata."""
    metadata = obj.get("metadata") if isinstance(obj, dict) else None
    if not isinstance(metadata, dict):
        return None
    namespace = metadata.get("namespace")
    name = metadata.get("name")
    if not namespace or not name:
        return None
    return namespace, name


def unique_projects(projects: Iterable[ProjectView]) -> List[ProjectView]:
    """Drop repeated projects, keeping the first occurrence."""
    seen = set()
    result = []
    for project in projects:
        if project not in seen:
            seen.add(project)
            result.append(project)
    return result


class DiscoveryContext:
    """Context object providing project discovery for endpoints."""

    def __init__(
        self,
        user: User,
        resolver: ProjectResolver,
        cluster_objects: ClusterObjectRepository,
    ):
        self.user = user
        self.identity = user.to_identity()
        self.resolver = resolver
        self.cluster_objects = cluster_objects

    def projects_in(self, obj: Dict[str, Any]) -> List[ProjectView]:
        """Projects visible to the user in one cluster object."""
        key = object_key(obj)
        if key is None:
            logger.error("Skipping cluster object without namespace or name")
            return []
        namespace, name = key
        return self.resolver.list_projects(namespace, name, obj, self.identity)

    def list_projects(self, cluster: Optional[str] = None) -> List[ProjectView]:
        """Projects visible to the user across cluster objects.

        Args:
            cluster: Restrict to cluster objects in this namespace
        """
        projects: List[ProjectView] = []
        for obj in self.cluster_objects.list_all(namespace=cluster):
            projects.extend(self.projects_in(obj))
        return projects


def get_discovery_context(
    user: User = Depends(get_current_user),
    resolver: ProjectResolver = Depends(get_project_resolver),
    cluster_objects: ClusterObjectRepository = Depends(get_cluster_objects),
) -> DiscoveryContext:
    """
    FastAPI dependency to get discovery context for current user.

    Usage:
        @router.get("/projects")
        async def list_projects(
            discovery: DiscoveryContext = Depends(get_discovery_context)
        ):
            return discovery.list_projects()
    """
    return DiscoveryContext(user, resolver, cluster_objects)
