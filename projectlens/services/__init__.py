"""Business logic services package."""

from .projects import (BindingSource, EmbeddedRoleBindingSource,
                       ProjectResolver, create_project_resolver,
                       decode_role_bindings, is_bound_user,
                       is_recognized_role, list_projects)
from .rules import (api_group_matches, capabilities_for_role,
                    get_admin_capability, get_clusterset_names,
                    get_view_capability, resource_matches, verb_matches)
from .subjects import equal_subjects, merge_labels, merge_subjects, union_names
from .unstructured import to_attribute_map

__all__ = [
    # Projects
    "BindingSource",
    "EmbeddedRoleBindingSource",
    "ProjectResolver",
    "create_project_resolver",
    "decode_role_bindings",
    "is_bound_user",
    "is_recognized_role",
    "list_projects",
    # Rules
    "api_group_matches",
    "resource_matches",
    "verb_matches",
    "get_view_capability",
    "get_admin_capability",
    "get_clusterset_names",
    "capabilities_for_role",
    # Helpers
    "equal_subjects",
    "merge_subjects",
    "merge_labels",
    "union_names",
    "to_attribute_map",
]
