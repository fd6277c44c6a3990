"""Project discovery from the role bindings embedded in cluster objects.

A project is a namespace of a managed cluster that a user may see because a
role binding in the cluster object grants them one of the recognized roles
there. The resolver never raises: malformed input is logged and skipped, and
an unreadable object yields no projects.
"""

from typing import (Any, Dict, FrozenSet, Iterable, Iterator, List, Optional,
                    Protocol, Sequence)

from projectlens.core.config import DEFAULT_RECOGNIZED_ROLES, get_settings
from projectlens.core.exceptions import ConversionError, InvalidFieldError
from projectlens.core.logging import get_logger, log_event
from projectlens.models.rbac import (DecodedBinding, MalformedBinding,
                                     ProjectView, RoleBindingEntry, Subject,
                                     SubjectKind, UserIdentity)
from projectlens.services.unstructured import (nested_map, nested_slice,
                                               nested_string,
                                               to_attribute_map)

logger = get_logger(__name__)


class BindingSource(Protocol):
    """Reads a list of raw role bindings out of a cluster object."""

    name: str

    def read(self, attributes: Dict[str, Any]) -> Optional[List[Any]]:
        """Return the raw bindings, or None when the object has none.

        Raises:
            InvalidFieldError: if the bindings field has the wrong type
        """
        ...


class EmbeddedRoleBindingSource:
    """Bindings listed under ``spec.roleBindings``."""

    name = "spec.roleBindings"

    def read(self, attributes: Dict[str, Any]) -> Optional[List[Any]]:
        bindings, found = nested_slice(attributes, "spec", "roleBindings")
        if not found:
            return None
        return bindings


def decode_role_binding(index: int, raw: Any) -> DecodedBinding:
    """Decode one raw binding.

    The subject must be present and well formed; role reference and namespace
    are optional here and checked by the resolver in order. Only a missing or
    null field counts as absent; an empty string is kept as is.
    """
    if not isinstance(raw, dict):
        return MalformedBinding(
            index=index, reason=f"binding is a {type(raw).__name__}, not a map"
        )

    try:
        subject_map, found = nested_map(raw, "subject")
        if not found:
            return MalformedBinding(
                index=index, reason="subject is not found", field="subject"
            )
        subject = Subject.from_dict(subject_map)
    except (InvalidFieldError, ValueError) as e:
        return MalformedBinding(index=index, reason=str(e), field="subject")

    try:
        role_ref_name = None
        role_ref, found = nested_map(raw, "roleRef")
        if found:
            role_ref_name, _ = nested_string(role_ref, "name")
    except InvalidFieldError as e:
        return MalformedBinding(index=index, reason=str(e), field="roleRef")

    try:
        namespace, _ = nested_string(raw, "namespace")
    except InvalidFieldError as e:
        return MalformedBinding(index=index, reason=str(e), field="namespace")

    return RoleBindingEntry(
        index=index,
        subject=subject,
        role_ref_name=role_ref_name,
        namespace=namespace,
    )


def decode_role_bindings(items: Iterable[Any]) -> Iterator[DecodedBinding]:
    for index, raw in enumerate(items):
        yield decode_role_binding(index, raw)


def is_bound_user(subject: Subject, identity: UserIdentity) -> bool:
    if subject.kind == SubjectKind.GROUP:
        return subject.name in identity.groups
    if subject.kind == SubjectKind.USER:
        return subject.name == identity.name
    return False


def is_recognized_role(
    name: str, recognized_roles: Iterable[str] = DEFAULT_RECOGNIZED_ROLES
) -> bool:
    return name in recognized_roles


class ProjectResolver:
    """Resolves the projects a user can see in a cluster object."""

    def __init__(
        self,
        recognized_roles: Iterable[str] = DEFAULT_RECOGNIZED_ROLES,
        sources: Optional[Sequence[BindingSource]] = None,
    ):
        self.recognized_roles: FrozenSet[str] = frozenset(recognized_roles)
        self.sources: List[BindingSource] = list(
            sources if sources is not None else [EmbeddedRoleBindingSource()]
        )

    def list_projects(
        self,
        cluster_namespace: str,
        cluster_name: str,
        cluster_object: Any,
        identity: UserIdentity,
    ) -> List[ProjectView]:
        """List the projects ``identity`` may see in ``cluster_object``.

        Args:
            cluster_namespace: Namespace of the cluster object; it names the
                managed cluster and becomes ``ProjectView.cluster``
            cluster_name: Name of the cluster object
            cluster_object: The cluster object, structured or already a map
            identity: The authenticated caller

        Returns:
            Projects in binding order, duplicates included
        """
        context = {"cluster_namespace": cluster_namespace, "cluster_name": cluster_name}
        projects: List[ProjectView] = []

        try:
            attributes = to_attribute_map(cluster_object)
        except ConversionError as e:
            logger.error(
                f"Failed to convert object {cluster_namespace}/{cluster_name}: {e}",
                extra=context,
            )
            return projects

        for source in self.sources:
            try:
                raw_bindings = source.read(attributes)
            except InvalidFieldError as e:
                logger.error(
                    f"Invalid {source.name} in {cluster_namespace}/{cluster_name}: {e}",
                    extra={**context, "field": source.name},
                )
                continue
            if raw_bindings is None:
                continue

            projects.extend(
                self._resolve_bindings(
                    decode_role_bindings(raw_bindings), identity, context
                )
            )

        return projects

    def _resolve_bindings(
        self,
        bindings: Iterable[DecodedBinding],
        identity: UserIdentity,
        context: Dict[str, str],
    ) -> Iterator[ProjectView]:
        source = f"{context['cluster_namespace']}/{context['cluster_name']}"

        for binding in bindings:
            if isinstance(binding, MalformedBinding):
                logger.error(
                    f"Invalid roleBinding #{binding.index} in {source}: {binding.reason}",
                    extra={**context, "field": binding.field or "roleBindings"},
                )
                continue

            if not is_bound_user(binding.subject, identity):
                continue

            if binding.role_ref_name is None:
                logger.warning(
                    f"roleRef name is not found in {source}",
                    extra={**context, "field": "roleRef.name"},
                )
                continue

            if not is_recognized_role(binding.role_ref_name, self.recognized_roles):
                continue

            if binding.namespace is None:
                logger.warning(
                    f"namespace is not found in {source}",
                    extra={**context, "field": "namespace"},
                )
                continue

            log_event(
                logger,
                "info",
                "project_discovered",
                project=binding.namespace,
                role=binding.role_ref_name,
                user=identity.name,
                groups=sorted(identity.groups),
                **context,
            )
            yield ProjectView(name=binding.namespace, cluster=context["cluster_namespace"])


def create_project_resolver(
    recognized_roles: Optional[Iterable[str]] = None,
) -> ProjectResolver:
    """Build a resolver using the configured recognized roles by default."""
    if recognized_roles is None:
        recognized_roles = get_settings().recognized_role_set
    return ProjectResolver(recognized_roles=recognized_roles)


def list_projects(
    cluster_namespace: str,
    cluster_name: str,
    cluster_object: Any,
    identity: UserIdentity,
) -> List[ProjectView]:
    return create_project_resolver().list_projects(
        cluster_namespace, cluster_name, cluster_object, identity
    )
