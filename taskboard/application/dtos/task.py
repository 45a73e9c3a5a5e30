"""DTOs for task use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from taskboard.application.dtos.user import UserResult
from taskboard.domain.enums import DueDateBucket, TaskPriority, TaskStatus


@dataclass(frozen=True)
class TaskResult:
    """Task read-model."""

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

    def involves(self, user_id: int) -> bool:
        """True when user_id is the creator or the assignee."""
        return user_id in (self.created_by_id, self.assigned_to_id)


@dataclass(frozen=True)
class TaskCreate:
    """Validated input for creating a task."""

    title: str
    description: str
    due_date: datetime
    priority: TaskPriority
    assigned_to_id: int
    status: TaskStatus = TaskStatus.TODO


@dataclass(frozen=True)
class TaskUpdate:
    """Validated partial update. Fields left as None are not changed."""

    title: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    priority: TaskPriority | None = None
    status: TaskStatus | None = None
    assigned_to_id: int | None = None

    def changes(self) -> dict[str, object]:
        """Column -> value mapping of the fields that were provided."""
        return {
            name: value
            for name, value in (
                ("title", self.title),
                ("description", self.description),
                ("due_date", self.due_date),
                ("priority", self.priority),
                ("status", self.status),
                ("assigned_to_id", self.assigned_to_id),
            )
            if value is not None
        }


@dataclass(frozen=True)
class TaskFilters:
    """Optional narrowing applied identically by every task list query."""

    search: str | None = None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    due_date: DueDateBucket | None = None


@dataclass(frozen=True)
class TaskListResult:
    """Tasks plus every user they reference (creator and assignee), keyed by id."""

    tasks: list[TaskResult]
    users: dict[int, UserResult] = field(default_factory=dict)
