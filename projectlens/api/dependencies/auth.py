"""Authentication dependencies for FastAPI."""

from typing import List, Optional

from fastapi import HTTPException, Request, status

from projectlens.core.config import get_settings
from projectlens.core.logging import get_logger
from projectlens.models.auth import User

logger = get_logger(__name__)


class AuthenticationError(HTTPException):
    """Raised when authentication fails."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(HTTPException):
    """Raised when a requested object does not exist."""

    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


def parse_groups(value: Optional[str]) -> List[str]:
    """Parse a comma-separated groups header, dropping blanks and duplicates."""
    groups: List[str] = []
    for group in (value or "").split(","):
        group = group.strip()
        if group and group not in groups:
            groups.append(group)
    return groups


def extract_user_from_headers(request: Request) -> Optional[User]:
    """Extract user from OAuth proxy headers."""
    settings = get_settings()
    username = request.headers.get(settings.oauth_header_user)
    if not username:
        return None

    return User(
        username=username,
        email=request.headers.get(settings.oauth_header_email),
        groups=parse_groups(request.headers.get(settings.oauth_header_groups)),
    )


async def get_current_user(request: Request) -> User:
    """Get authenticated user from request."""
    user = extract_user_from_headers(request)
    if not user:
        raise AuthenticationError("No valid authentication found")
    logger.debug(f"Authenticated {user.username} with {len(user.groups)} groups")
    return user
