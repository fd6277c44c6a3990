"""Response builders and models."""

from .projects import Capability, ProjectList, ProjectResponse, RoleCapabilities

__all__ = [
    "Capability",
    "ProjectList",
    "ProjectResponse",
    "RoleCapabilities",
]
