"""Team API: per-user workload counts."""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskboard.api.v1.dependencies import CurrentUser, get_task_repo
from taskboard.infrastructure.persistence.repositories.task_repo import TaskRepository
from taskboard.schemas.stats import TeamMemberStatsResponse

router = APIRouter()


@router.get("/stats", response_model=list[TeamMemberStatsResponse])
async def team_stats(
    current_user: CurrentUser,
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
) -> list[TeamMemberStatsResponse]:
    """One row per user, ordered by username, counting tasks assigned to them."""
    rows = await task_repo.team_stats()
    return [TeamMemberStatsResponse.model_validate(r) for r in rows]
