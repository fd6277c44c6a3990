"""Authentication models."""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from projectlens.models.rbac import UserIdentity


class User(BaseModel):
    """User model extracted from OAuth proxy headers."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "username": "jdoe",
                "email": "jdoe@example.com",
                "groups": ["team-a", "cluster-viewers"],
                "authenticated_at": "2024-01-15T10:30:00Z",
                "auth_provider": "oauth-proxy",
            }
        }
    )

    username: str = Field(..., description="User's username")
    email: Optional[str] = Field(None, description="User's email address or identifier")
    groups: List[str] = Field(default_factory=list, description="User's groups")

    authenticated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc)
    )
    auth_provider: str = Field("oauth-proxy", description="Authentication provider")

    @property
    def id(self) -> str:
        """Get user ID (username)."""
        return self.username

    def to_identity(self) -> UserIdentity:
        """Convert to the identity consumed by project discovery."""
        return UserIdentity(name=self.username, groups=frozenset(self.groups))
