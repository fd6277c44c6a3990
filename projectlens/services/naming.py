"""Names of the RBAC objects managed for clusters and cluster sets."""

PREFIX = "open-cluster-management"


def generate_cluster_role_name(cluster_name: str, role: str) -> str:
    return f"{PREFIX}:{role}:{cluster_name}"


def generate_clusterset_cluster_role_name(clusterset_name: str, role: str) -> str:
    return f"{PREFIX}:managedclusterset:{role}:{clusterset_name}"


def generate_cluster_role_binding_name(cluster_name: str) -> str:
    return f"{PREFIX}:clusterset:managedcluster:{cluster_name}"


def build_cluster_role_name(obj_name: str, rule: str) -> str:
    return f"{PREFIX}:{rule}:{obj_name}"
