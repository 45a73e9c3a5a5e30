"""Task API schemas."""

from datetime import datetime

from pydantic import Field

from taskboard.application.dtos.task import TaskCreate, TaskUpdate
from taskboard.domain.enums import TaskPriority, TaskStatus
from taskboard.schemas.common import CamelModel
from taskboard.schemas.user import UserResponse


class TaskCreateRequest(CamelModel):
    """Request body for creating a task."""

    title: str = Field(..., min_length=3, max_length=500)
    description: str = Field(..., min_length=5)
    due_date: datetime
    priority: TaskPriority
    assigned_to_id: int = Field(..., gt=0)
    status: TaskStatus = TaskStatus.TODO

    def to_dto(self) -> TaskCreate:
        return TaskCreate(
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            priority=self.priority,
            assigned_to_id=self.assigned_to_id,
            status=self.status,
        )


class TaskUpdateRequest(CamelModel):
    """Request body for updating a task (partial). Omitted or null fields are kept."""

    title: str | None = Field(default=None, min_length=3, max_length=500)
    description: str | None = Field(default=None, min_length=5)
    due_date: datetime | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assigned_to_id: int | None = Field(default=None, gt=0)

    def to_dto(self) -> TaskUpdate:
        return TaskUpdate(
            title=self.title,
            description=self.description,
            due_date=self.due_date,
            priority=self.priority,
            status=self.status,
            assigned_to_id=self.assigned_to_id,
        )


class TaskStatusUpdateRequest(CamelModel):
    """Request body for PATCH /tasks/{id}/status."""

    status: TaskStatus


class TaskAssigneeUpdateRequest(CamelModel):
    """Request body for PATCH /tasks/{id}/assignee."""

    assignee_id: int = Field(..., gt=0)


class TaskResponse(CamelModel):
    """Task response."""

    id: int
    title: str
    description: str
    due_date: datetime
    priority: TaskPriority
    status: TaskStatus
    created_by_id: int
    assigned_to_id: int
    created_at: datetime
    updated_at: datetime


class TaskListResponse(CamelModel):
    """Tasks plus the users they reference, keyed by user id."""

    tasks: list[TaskResponse]
    users: dict[int, UserResponse]
