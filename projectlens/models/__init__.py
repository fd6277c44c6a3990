"""Data models package."""

from .auth import User
from .rbac import (API_GROUP_ALL, RESOURCE_ALL, VERB_ALL, CapabilityResult,
                   DecodedBinding, MalformedBinding, PolicyRule, ProjectView,
                   RoleBindingEntry, Subject, SubjectKind, UserIdentity)

__all__ = [
    "User",
    "API_GROUP_ALL",
    "RESOURCE_ALL",
    "VERB_ALL",
    "CapabilityResult",
    "DecodedBinding",
    "MalformedBinding",
    "PolicyRule",
    "ProjectView",
    "RoleBindingEntry",
    "Subject",
    "SubjectKind",
    "UserIdentity",
]
