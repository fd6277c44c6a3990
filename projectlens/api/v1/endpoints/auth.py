"""
Authentication routes
"""

from fastapi import APIRouter, Depends

from projectlens.api.dependencies.auth import get_current_user
from projectlens.core.logging import get_logger
from projectlens.models.auth import User

logger = get_logger(__name__)
router = APIRouter()


@router.get(
    "/me",
    response_model=User,
    summary="Current User",
    description="Get current authenticated user information",
)
async def get_me(user: User = Depends(get_current_user)) -> User:
    logger.info(
        "User information requested",
        extra={"user_id": user.id, "groups_count": len(user.groups)},
    )
    return user
