"""Kubernetes access for cluster objects and ClusterRoles."""

from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

from kubernetes import client, config
from kubernetes.client.rest import ApiException

from projectlens.core.config import get_settings
from projectlens.core.exceptions import UpstreamError
from projectlens.core.logging import get_logger
from projectlens.models.rbac import PolicyRule, Subject, SubjectKind
from projectlens.services.subjects import equal_subjects, merge_labels

logger = get_logger(__name__)

RBAC_API_GROUP = "rbac.authorization.k8s.io"


def _is_not_found(e: ApiException) -> bool:
    return e.status == 404


def _upstream_error(action: str, e: ApiException) -> UpstreamError:
    logger.error(f"Kubernetes API error while {action}: {e.status} {e.reason}")
    return UpstreamError(f"{action} failed: {e.reason}", status=e.status)


@lru_cache(maxsize=1)
def get_api_client() -> client.ApiClient:
    """Load in-cluster configuration, falling back to kubeconfig."""
    if get_settings().kube_in_cluster:
        try:
            config.load_incluster_config()
            logger.info("Kubernetes client initialized (in-cluster)")
            return client.ApiClient()
        except config.ConfigException:
            logger.debug("In-cluster configuration unavailable, trying kubeconfig")

    config.load_kube_config()
    logger.info("Kubernetes client initialized (kubeconfig)")
    return client.ApiClient()


class ClusterObjectRepository:
    """Reads the cluster objects that embed role bindings."""

    def __init__(
        self,
        custom_api: client.CustomObjectsApi,
        group: str,
        version: str,
        plural: str,
    ):
        self.api = custom_api
        self.group = group
        self.version = version
        self.plural = plural

    def get(self, namespace: str, name: str) -> Optional[Dict[str, Any]]:
        """Get one cluster object, or None if it does not exist."""
        try:
            return self.api.get_namespaced_custom_object(
                self.group, self.version, namespace, self.plural, name
            )
        except ApiException as e:
            if _is_not_found(e):
                return None
            raise _upstream_error(f"getting {self.plural} {namespace}/{name}", e)

    def list_all(self, namespace: Optional[str] = None) -> List[Dict[str, Any]]:
        """List cluster objects across all namespaces or in one namespace."""
        try:
            if namespace:
                result = self.api.list_namespaced_custom_object(
                    self.group, self.version, namespace, self.plural
                )
            else:
                result = self.api.list_cluster_custom_object(
                    self.group, self.version, self.plural
                )
        except ApiException as e:
            raise _upstream_error(f"listing {self.plural}", e)
        return result.get("items") or []


def _to_rbac_subject(subject: Subject) -> client.RbacV1Subject:
    return client.RbacV1Subject(
        api_group=RBAC_API_GROUP, kind=subject.kind.value, name=subject.name
    )


def _from_rbac_subject(subject: client.RbacV1Subject) -> Subject:
    return Subject(kind=SubjectKind(subject.kind), name=subject.name)


def _to_v1_policy_rule(rule: PolicyRule) -> client.V1PolicyRule:
    return client.V1PolicyRule(
        api_groups=list(rule.api_groups),
        resources=list(rule.resources),
        resource_names=list(rule.resource_names) or None,
        verbs=list(rule.verbs),
    )


class ClusterRoleRepository:
    """ClusterRole and ClusterRoleBinding access with apply-if-different
    semantics."""

    def __init__(self, rbac_api: client.RbacAuthorizationV1Api):
        self.api = rbac_api

    def get_rules(self, name: str) -> Optional[List[PolicyRule]]:
        """Get the rules of a ClusterRole, or None if it does not exist."""
        try:
            cluster_role = self.api.read_cluster_role(name)
        except ApiException as e:
            if _is_not_found(e):
                return None
            raise _upstream_error(f"reading clusterrole {name}", e)
        return [PolicyRule.from_k8s(rule) for rule in cluster_role.rules or []]

    def apply_cluster_role(self, name: str, rules: Sequence[PolicyRule]) -> bool:
        """Create the ClusterRole or update its rules if they differ.

        Returns:
            True if the ClusterRole was created or updated
        """
        rules = list(rules)
        try:
            existing = self.api.read_cluster_role(name)
        except ApiException as e:
            if not _is_not_found(e):
                raise _upstream_error(f"reading clusterrole {name}", e)
            body = client.V1ClusterRole(
                metadata=client.V1ObjectMeta(name=name),
                rules=[_to_v1_policy_rule(rule) for rule in rules],
            )
            try:
                self.api.create_cluster_role(body)
            except ApiException as e:
                raise _upstream_error(f"creating clusterrole {name}", e)
            logger.info(f"Created clusterrole {name}")
            return True

        current = [PolicyRule.from_k8s(rule) for rule in existing.rules or []]
        if current == rules:
            return False

        existing.rules = [_to_v1_policy_rule(rule) for rule in rules]
        try:
            self.api.replace_cluster_role(name, existing)
        except ApiException as e:
            raise _upstream_error(f"updating clusterrole {name}", e)
        logger.info(f"Updated rules of clusterrole {name}")
        return True

    def delete_cluster_role(self, name: str) -> None:
        """Delete a ClusterRole; a missing role is not an error."""
        try:
            self.api.delete_cluster_role(name)
        except ApiException as e:
            if _is_not_found(e):
                return
            raise _upstream_error(f"deleting clusterrole {name}", e)
        logger.info(f"Deleted clusterrole {name}")

    def apply_cluster_role_binding(
        self,
        name: str,
        role_name: str,
        subjects: Sequence[Subject],
        labels: Optional[Dict[str, str]] = None,
    ) -> bool:
        """Create the ClusterRoleBinding or update it when labels, subjects or
        role reference differ.

        Returns:
            True if the binding was created or updated
        """
        role_ref = client.V1RoleRef(
            api_group=RBAC_API_GROUP, kind="ClusterRole", name=role_name
        )
        try:
            existing = self.api.read_cluster_role_binding(name)
        except ApiException as e:
            if not _is_not_found(e):
                raise _upstream_error(f"reading clusterrolebinding {name}", e)
            body = client.V1ClusterRoleBinding(
                metadata=client.V1ObjectMeta(name=name, labels=dict(labels or {})),
                role_ref=role_ref,
                subjects=[_to_rbac_subject(subject) for subject in subjects],
            )
            try:
                self.api.create_cluster_role_binding(body)
            except ApiException as e:
                raise _upstream_error(f"creating clusterrolebinding {name}", e)
            logger.info(f"Created clusterrolebinding {name}")
            return True

        existing_labels = dict(existing.metadata.labels or {})
        modified = merge_labels(existing_labels, labels)

        current_ref = existing.role_ref
        role_ref_is_same = (
            current_ref is not None
            and (current_ref.api_group, current_ref.kind, current_ref.name)
            == (role_ref.api_group, role_ref.kind, role_ref.name)
        )
        current_subjects = [
            _from_rbac_subject(subject) for subject in existing.subjects or []
        ]
        subjects_are_same = equal_subjects(current_subjects, list(subjects))

        if role_ref_is_same and subjects_are_same and not modified:
            return False

        existing.metadata.labels = existing_labels
        existing.role_ref = role_ref
        existing.subjects = [_to_rbac_subject(subject) for subject in subjects]
        try:
            self.api.replace_cluster_role_binding(name, existing)
        except ApiException as e:
            raise _upstream_error(f"updating clusterrolebinding {name}", e)
        logger.info(f"Updated clusterrolebinding {name}")
        return True


@lru_cache(maxsize=1)
def get_cluster_object_repository() -> ClusterObjectRepository:
    settings = get_settings()
    return ClusterObjectRepository(
        client.CustomObjectsApi(get_api_client()),
        group=settings.cluster_object_group,
        version=settings.cluster_object_version,
        plural=settings.cluster_object_plural,
    )


@lru_cache(maxsize=1)
def get_cluster_role_repository() -> ClusterRoleRepository:
    return ClusterRoleRepository(client.RbacAuthorizationV1Api(get_api_client()))
