"""RBAC domain types used by rule matching and project discovery."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple, Union

# Wildcards shared by API groups, resources and verbs
API_GROUP_ALL = "*"
RESOURCE_ALL = "*"
VERB_ALL = "*"


class SubjectKind(str, Enum):
    """Kinds of principals a role binding may reference."""

    USER = "User"
    GROUP = "Group"
    SERVICE_ACCOUNT = "ServiceAccount"


@dataclass(frozen=True)
class Subject:
    """Principal bound by a role binding."""

    kind: SubjectKind
    name: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Subject":
        """Build a subject from its Kubernetes representation.

        Raises:
            ValueError: if kind or name is missing or kind is unknown
        """
        kind = data.get("kind")
        name = data.get("name")
        if not isinstance(kind, str) or not kind:
            raise ValueError(f"subject kind is missing or invalid: {kind!r}")
        if not isinstance(name, str) or not name:
            raise ValueError(f"subject name is missing or invalid: {name!r}")
        return cls(kind=SubjectKind(kind), name=name)

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "name": self.name}


@dataclass(frozen=True)
class UserIdentity:
    """Already-authenticated caller identity."""

    name: str
    groups: FrozenSet[str] = field(default_factory=frozenset)

    def __post_init__(self):
        # Accept any iterable of group names
        if not isinstance(self.groups, frozenset):
            object.__setattr__(self, "groups", frozenset(self.groups))


@dataclass(frozen=True)
class RoleBindingEntry:
    """A decoded role binding; optional fields are None when absent."""

    index: int
    subject: Subject
    role_ref_name: Optional[str] = None
    namespace: Optional[str] = None


@dataclass(frozen=True)
class MalformedBinding:
    """A role binding that could not be decoded."""

    index: int
    reason: str
    field: str = ""


DecodedBinding = Union[RoleBindingEntry, MalformedBinding]


@dataclass(frozen=True)
class ProjectView:
    """A namespace discovered as a project inside a cluster."""

    name: str
    cluster: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "cluster": self.cluster}


def _as_tuple(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    return tuple(values) if values else ()


@dataclass(frozen=True)
class PolicyRule:
    """A single RBAC policy rule."""

    api_groups: Tuple[str, ...] = ()
    resources: Tuple[str, ...] = ()
    resource_names: Tuple[str, ...] = ()
    verbs: Tuple[str, ...] = ()

    def __post_init__(self):
        for name in ("api_groups", "resources", "resource_names", "verbs"):
            object.__setattr__(self, name, _as_tuple(getattr(self, name)))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PolicyRule":
        """Build a rule from a Kubernetes-style camelCase dict."""
        return cls(
            api_groups=data.get("apiGroups"),
            resources=data.get("resources"),
            resource_names=data.get("resourceNames"),
            verbs=data.get("verbs"),
        )

    @classmethod
    def from_k8s(cls, rule: Any) -> "PolicyRule":
        """Build a rule from a kubernetes client ``V1PolicyRule``."""
        return cls(
            api_groups=rule.api_groups,
            resources=rule.resources,
            resource_names=rule.resource_names,
            verbs=rule.verbs,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "apiGroups": list(self.api_groups),
            "resources": list(self.resources),
            "verbs": list(self.verbs),
        }
        if self.resource_names:
            data["resourceNames"] = list(self.resource_names)
        return data


@dataclass(frozen=True)
class CapabilityResult:
    """Names a role may access, or every name when ``all_names`` is set."""

    names: FrozenSet[str] = field(default_factory=frozenset)
    all_names: bool = False

    def allows(self, name: str) -> bool:
        return self.all_names or name in self.names

    @property
    def empty(self) -> bool:
        return not self.all_names and not self.names

    def to_dict(self) -> Dict[str, Any]:
        return {"names": sorted(self.names), "allNames": self.all_names}
