"""Task API: create, filtered lists, stats, single-task reads and mutations.

Mutations go through TaskService, which authorizes, writes, commits and then
pushes live updates. Reads delegate straight to TaskRepository.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from taskboard.api.v1.dependencies import (
    CurrentUser,
    get_overdue_filters,
    get_task_filters,
    get_task_repo,
    get_task_service,
)
from taskboard.application.dtos.task import TaskFilters, TaskListResult
from taskboard.application.use_cases.tasks import TaskService
from taskboard.infrastructure.persistence.repositories.task_repo import TaskRepository
from taskboard.schemas.common import MessageResponse
from taskboard.schemas.stats import TaskStatsResponse
from taskboard.schemas.task import (
    TaskAssigneeUpdateRequest,
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)
from taskboard.schemas.user import UserResponse

router = APIRouter()


def _list_response(result: TaskListResult) -> TaskListResponse:
    return TaskListResponse(
        tasks=[TaskResponse.model_validate(t) for t in result.tasks],
        users={uid: UserResponse.model_validate(u) for uid, u in result.users.items()},
    )


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    body: TaskCreateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Create a task owned by the caller."""
    task = await service.create_task(current_user, body.to_dto())
    return TaskResponse.model_validate(task)


@router.get("/assigned", response_model=TaskListResponse)
async def list_assigned_tasks(
    current_user: CurrentUser,
    filters: Annotated[TaskFilters, Depends(get_task_filters)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
) -> TaskListResponse:
    """Tasks assigned to the caller, most recently updated first."""
    return _list_response(await task_repo.list_assigned(current_user.id, filters))


@router.get("/created", response_model=TaskListResponse)
async def list_created_tasks(
    current_user: CurrentUser,
    filters: Annotated[TaskFilters, Depends(get_task_filters)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
) -> TaskListResponse:
    """Tasks the caller created, most recently updated first."""
    return _list_response(await task_repo.list_created(current_user.id, filters))


@router.get("/overdue", response_model=TaskListResponse)
async def list_overdue_tasks(
    current_user: CurrentUser,
    filters: Annotated[TaskFilters, Depends(get_overdue_filters)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
) -> TaskListResponse:
    """Overdue tasks the caller created or is assigned, earliest due first."""
    return _list_response(await task_repo.list_overdue(current_user.id, filters))


@router.get("/stats", response_model=TaskStatsResponse)
async def task_stats(
    current_user: CurrentUser,
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
) -> TaskStatsResponse:
    stats = await task_repo.stats_for_user(current_user.id)
    return TaskStatsResponse.model_validate(stats)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    return TaskResponse.model_validate(await service.get_task(task_id))


@router.patch("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Partial update. Creator or assignee; only the creator may change the assignee."""
    task = await service.update_task(current_user, task_id, body.to_dto())
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}/status", response_model=TaskResponse)
async def update_task_status(
    task_id: int,
    body: TaskStatusUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    task = await service.update_status(current_user, task_id, body.status)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}/assignee", response_model=TaskResponse)
async def update_task_assignee(
    task_id: int,
    body: TaskAssigneeUpdateRequest,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Reassign a task. Creator only."""
    task = await service.update_assignee(current_user, task_id, body.assignee_id)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    current_user: CurrentUser,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> MessageResponse:
    """Delete a task and its notifications. Creator only."""
    await service.delete_task(current_user, task_id)
    return MessageResponse(message="Task deleted successfully")
