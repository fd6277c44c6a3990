"""Pytest configuration and shared fixtures for projectlens tests."""

from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from projectlens.api.dependencies.discovery import (get_cluster_objects,
                                                    get_cluster_roles)
from projectlens.main import app
from projectlens.models.rbac import PolicyRule, UserIdentity

# ============================================================================
# Builders
# ============================================================================


def make_binding(
    kind: Optional[str] = "Group",
    subject_name: Optional[str] = "team-a",
    role: Optional[str] = "kubevirt.io:edit",
    namespace: Optional[str] = "ns1",
) -> Dict[str, Any]:
    """Build a role binding entry; pass None to leave a field out."""
    binding: Dict[str, Any] = {}
    if kind is not None or subject_name is not None:
        subject = {"apiGroup": "rbac.authorization.k8s.io"}
        if kind is not None:
            subject["kind"] = kind
        if subject_name is not None:
            subject["name"] = subject_name
        binding["subject"] = subject
    if role is not None:
        binding["roleRef"] = {
            "apiGroup": "rbac.authorization.k8s.io",
            "kind": "ClusterRole",
            "name": role,
        }
    if namespace is not None:
        binding["namespace"] = namespace
    return binding


def make_cluster_object(
    namespace: str = "clusterX",
    name: str = "kubevirt-permissions",
    bindings: Optional[List[Any]] = None,
) -> Dict[str, Any]:
    """Build a cluster object; ``bindings=None`` omits spec.roleBindings."""
    obj: Dict[str, Any] = {
        "apiVersion": "rbac.open-cluster-management.io/v1alpha1",
        "kind": "ClusterPermission",
        "metadata": {"namespace": namespace, "name": name},
        "spec": {},
    }
    if bindings is not None:
        obj["spec"]["roleBindings"] = bindings
    return obj


# Exposed as fixtures so test modules need not import conftest
@pytest.fixture
def binding():
    return make_binding


@pytest.fixture
def cluster_object():
    return make_cluster_object


# ============================================================================
# Identity Fixtures
# ============================================================================


@pytest.fixture
def alice():
    """Member of team-a."""
    return UserIdentity(name="alice", groups=frozenset({"team-a"}))


@pytest.fixture
def bob():
    """User without groups."""
    return UserIdentity(name="bob", groups=frozenset())


# ============================================================================
# Rule Fixtures
# ============================================================================


@pytest.fixture
def kubevirt_view_rules():
    """Rules of a ClusterRole granting view on two named VMs."""
    return [
        PolicyRule(
            api_groups=["kubevirt.io"],
            resources=["virtualmachines"],
            resource_names=["vm-1", "vm-2"],
            verbs=["get", "list", "watch"],
        ),
        PolicyRule(
            api_groups=[""],
            resources=["pods"],
            verbs=["get"],
        ),
    ]


# ============================================================================
# Fake Repositories
# ============================================================================


class FakeClusterObjects:
    """In-memory stand-in for ClusterObjectRepository."""

    def __init__(self, objects: Optional[List[Dict[str, Any]]] = None):
        self.objects = list(objects or [])

    def get(self, namespace: str, name: str) -> Optional[Dict[str, Any]]:
        for obj in self.objects:
            metadata = obj.get("metadata", {})
            if metadata.get("namespace") == namespace and metadata.get("name") == name:
                return obj
        return None

    def list_all(self, namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        if namespace is None:
            return list(self.objects)
        return [
            obj
            for obj in self.objects
            if obj.get("metadata", {}).get("namespace") == namespace
        ]


class FakeClusterRoles:
    """In-memory stand-in for ClusterRoleRepository."""

    def __init__(self, roles: Optional[Dict[str, List[PolicyRule]]] = None):
        self.roles = dict(roles or {})

    def get_rules(self, name: str) -> Optional[List[PolicyRule]]:
        return self.roles.get(name)


@pytest.fixture
def cluster_objects():
    return FakeClusterObjects(
        [
            make_cluster_object(
                "clusterX",
                "kubevirt-permissions",
                [
                    make_binding("Group", "team-a", "kubevirt.io:edit", "ns1"),
                    make_binding("User", "alice", "kubevirt.io:view", "ns2"),
                    make_binding("User", "alice", "kubevirt.io:admin", "ns1"),
                    make_binding("Group", "team-b", "kubevirt.io:view", "ns3"),
                ],
            ),
            make_cluster_object(
                "clusterY",
                "kubevirt-permissions",
                [
                    make_binding("Group", "team-a", "kubevirt.io:view", "apps"),
                    make_binding("Group", "team-a", "custom:role", "secret"),
                ],
            ),
            make_cluster_object("clusterZ", "empty-permissions"),
        ]
    )


@pytest.fixture
def cluster_roles(kubevirt_view_rules):
    return FakeClusterRoles(
        {
            "kubevirt.io:view": kubevirt_view_rules,
            "cluster-admin": [
                PolicyRule(api_groups=["*"], resources=["*"], verbs=["*"])
            ],
        }
    )


# ============================================================================
# Test Client Fixtures
# ============================================================================


@pytest.fixture
def test_client(cluster_objects, cluster_roles):
    """Provide a test client with fake repositories."""
    app.dependency_overrides[get_cluster_objects] = lambda: cluster_objects
    app.dependency_overrides[get_cluster_roles] = lambda: cluster_roles

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def authenticated_client(test_client):
    """Provide a test client with alice's OAuth proxy headers."""
    test_client.headers.update(
        {
            "X-Forwarded-User": "alice",
            "X-Forwarded-Email": "alice@example.com",
            "X-Forwarded-Groups": "team-a, developers",
        }
    )
    return test_client


# ============================================================================
# Utility Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def reset_lru_caches():
    """Reset LRU caches between tests."""
    from projectlens.core.config import get_settings
    from projectlens.repositories.kubernetes import (
        get_api_client, get_cluster_object_repository,
        get_cluster_role_repository)

    caches = [
        get_settings,
        get_api_client,
        get_cluster_object_repository,
        get_cluster_role_repository,
    ]
    for cached in caches:
        cached.cache_clear()

    yield

    for cached in caches:
        cached.cache_clear()


# ============================================================================
# Markers
# ============================================================================


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
