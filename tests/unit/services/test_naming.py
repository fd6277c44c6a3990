"""Unit tests for RBAC object naming."""

import pytest

from projectlens.services.naming import (build_cluster_role_name,
                                         generate_cluster_role_binding_name,
                                         generate_cluster_role_name,
                                         generate_clusterset_cluster_role_name)


@pytest.mark.unit
def test_cluster_role_name():
    assert (
        generate_cluster_role_name("cluster1", "admin")
        == "open-cluster-management:admin:cluster1"
    )


@pytest.mark.unit
def test_clusterset_cluster_role_name():
    assert (
        generate_clusterset_cluster_role_name("set1", "bind")
        == "open-cluster-management:managedclusterset:bind:set1"
    )


@pytest.mark.unit
def test_cluster_role_binding_name():
    assert (
        generate_cluster_role_binding_name("cluster1")
        == "open-cluster-management:clusterset:managedcluster:cluster1"
    )


@pytest.mark.unit
def test_build_cluster_role_name():
    assert (
        build_cluster_role_name("set1", "view")
        == "open-cluster-management:view:set1"
    )
