"""Response models for project discovery and role capabilities."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from projectlens.models.rbac import CapabilityResult, ProjectView


class ProjectResponse(BaseModel):
    """A project visible to the caller."""

    name: str = Field(..., description="Namespace exposed as a project")
    cluster: str = Field(..., description="Managed cluster owning the namespace")

    @classmethod
    def from_view(cls, view: ProjectView) -> "ProjectResponse":
        return cls(name=view.name, cluster=view.cluster)


class ProjectList(BaseModel):
    """Projects visible to the caller."""

    items: List[ProjectResponse] = Field(default_factory=list)
    total: int = Field(0, description="Number of projects returned")

    @classmethod
    def from_views(cls, views: List[ProjectView]) -> "ProjectList":
        items = [ProjectResponse.from_view(view) for view in views]
        return cls(items=items, total=len(items))


class Capability(BaseModel):
    """Resource names a role grants, or all of them."""

    model_config = ConfigDict(populate_by_name=True)

    names: List[str] = Field(default_factory=list)
    all_names: bool = Field(False, alias="allNames")

    @classmethod
    def from_result(cls, result: CapabilityResult) -> "Capability":
        return cls(names=sorted(result.names), all_names=result.all_names)


class RoleCapabilities(BaseModel):
    """View and admin capabilities of a ClusterRole on a resource type."""

    role: str
    group: str
    resource: str
    view: Capability
    admin: Capability
