"""Set and equality helpers for subjects, names and labels."""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

from projectlens.models.rbac import Subject


def equal_subjects(subjects1: Sequence[Subject], subjects2: Sequence[Subject]) -> bool:
    """Compare two subject lists ignoring order."""
    if len(subjects1) != len(subjects2):
        return False
    return set(subjects1) == set(subjects2)


def merge_subjects(
    subjects: Sequence[Subject], current: Sequence[Subject]
) -> List[Subject]:
    """Append the subjects of ``current`` missing from ``subjects``.

    Only ``subjects`` is used for the membership check, so repeats within
    ``current`` are all appended.
    """
    merged = list(subjects)
    existing = set(subjects)
    for subject in current:
        if subject not in existing:
            merged.append(subject)
    return merged


def union_names(*name_sets: Optional[Iterable[str]]) -> FrozenSet[str]:
    names = set()
    for name_set in name_sets:
        if name_set:
            names.update(name_set)
    return frozenset(names)


def merge_labels(existing: Dict[str, str], required: Optional[Dict[str, str]]) -> bool:
    """Copy required labels into ``existing`` in place.

    Returns:
        True if ``existing`` was modified
    """
    modified = False
    for key, value in (required or {}).items():
        if existing.get(key) != value:
            existing[key] = value
            modified = True
    return modified
