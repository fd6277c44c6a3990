"""Repositories package for data access layer."""

from .kubernetes import (ClusterObjectRepository, ClusterRoleRepository,
                         get_cluster_object_repository,
                         get_cluster_role_repository)

__all__ = [
    "ClusterObjectRepository",
    "ClusterRoleRepository",
    "get_cluster_object_repository",
    "get_cluster_role_repository",
]
