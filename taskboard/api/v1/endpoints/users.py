"""User API: the directory used by assignment pickers."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskboard.api.v1.dependencies import CurrentUser, get_user_repo
from taskboard.infrastructure.persistence.repositories.user_repo import UserRepository
from taskboard.schemas.user import UserResponse

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    current_user: CurrentUser,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> list[UserResponse]:
    """All users ordered by username."""
    users = await user_repo.list_users()
    return [UserResponse.model_validate(u) for u in users]
