"""Policy rule matching.

Resolves a ClusterRole's rules into the capability a role grants on a
resource type. Rules are evaluated in order and the first matching rule that
is not restricted to named resources short-circuits the evaluation, so a
broad rule listed ahead of a narrower one masks the narrower grant.
"""

from typing import Callable, Dict, Iterable, Optional, Set

from projectlens.models.rbac import (API_GROUP_ALL, RESOURCE_ALL, VERB_ALL,
                                     CapabilityResult, PolicyRule)

CLUSTERSET_GROUP = "cluster.open-cluster-management.io"
CLUSTERSET_BIND = "managedclustersets/bind"
CLUSTERSET_JOIN = "managedclustersets/join"

VerbPredicate = Callable[[PolicyRule], bool]


def api_group_matches(rule: PolicyRule, requested_group: str) -> bool:
    for rule_group in rule.api_groups:
        if rule_group == API_GROUP_ALL:
            return True
        if rule_group == requested_group:
            return True
    return False


def resource_matches(
    rule: PolicyRule, requested_resource: str, requested_subresource: str = ""
) -> bool:
    """Check a rule's resources against a resource and optional subresource.

    ``*/<subresource>`` is matched literally; it is not a general glob.
    """
    for rule_resource in rule.resources:
        if rule_resource == RESOURCE_ALL:
            return True
        if rule_resource == requested_resource:
            return True
        if requested_subresource and rule_resource == f"*/{requested_subresource}":
            return True
    return False


def verb_matches(rule: PolicyRule, requested_verb: str) -> bool:
    return requested_verb in rule.verbs


def grants_view(rule: PolicyRule) -> bool:
    return (
        verb_matches(rule, "get")
        or verb_matches(rule, "list")
        or verb_matches(rule, VERB_ALL)
    )


def grants_admin(rule: PolicyRule) -> bool:
    # update must sit on the same rule as a read verb
    can_read = verb_matches(rule, "get") or verb_matches(rule, "list")
    return (verb_matches(rule, "update") and can_read) or verb_matches(
        rule, VERB_ALL
    )


def _collect_capability(
    rules: Optional[Iterable[PolicyRule]],
    group: str,
    resource: str,
    verb_predicate: VerbPredicate,
) -> CapabilityResult:
    names: Set[str] = set()
    for rule in rules or ():
        if not api_group_matches(rule, group):
            continue
        if not verb_predicate(rule):
            continue
        if not resource_matches(rule, resource):
            continue

        if not rule.resource_names:
            return CapabilityResult(names=frozenset(), all_names=True)

        names.update(rule.resource_names)
    return CapabilityResult(names=frozenset(names), all_names=False)


def get_view_capability(
    rules: Optional[Iterable[PolicyRule]], group: str, resource: str
) -> CapabilityResult:
    """Resource names a role may view (get, list or any verb)."""
    return _collect_capability(rules, group, resource, grants_view)


def get_admin_capability(
    rules: Optional[Iterable[PolicyRule]], group: str, resource: str
) -> CapabilityResult:
    """Resource names a role may administer (update alongside get or list)."""
    return _collect_capability(rules, group, resource, grants_admin)


def capabilities_for_role(
    rules: Optional[Iterable[PolicyRule]], group: str, resource: str
) -> Dict[str, CapabilityResult]:
    rules = list(rules or ())
    return {
        "view": get_view_capability(rules, group, resource),
        "admin": get_admin_capability(rules, group, resource),
    }


def get_clusterset_names(
    rules: Optional[Iterable[PolicyRule]], group: str = CLUSTERSET_GROUP
) -> Set[str]:
    """Managed cluster sets a role may bind to or join.

    ``{"*"}`` means every cluster set.
    """
    clusterset_names: Set[str] = set()
    for rule in rules or ():
        if (
            API_GROUP_ALL in rule.api_groups
            and RESOURCE_ALL in rule.resources
            and VERB_ALL in rule.verbs
        ):
            clusterset_names.add("*")
        if group not in rule.api_groups:
            continue
        if not any(
            resource in rule.resources
            for resource in (CLUSTERSET_BIND, CLUSTERSET_JOIN, RESOURCE_ALL)
        ):
            continue
        if not verb_matches(rule, "create") and not verb_matches(rule, VERB_ALL):
            continue

        for resource_name in rule.resource_names:
            if resource_name == "*":
                return {"*"}
            clusterset_names.add(resource_name)
    return clusterset_names
