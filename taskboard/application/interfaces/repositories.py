"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill.
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from taskboard.application.dtos.notification import (
        NotificationFeedItem,
        NotificationCreate,
        NotificationResult,
    )
    from taskboard.application.dtos.task import TaskCreate, TaskResult
    from taskboard.application.dtos.user import UserResult


class IUserRepository(Protocol):
    """Protocol for user lookups needed by task use cases."""

    async def get_user(self, user_id: int) -> UserResult | None:
        """Return user by id, or None."""

    async def exists(self, user_id: int) -> bool:
        """Return True if a user with this id exists."""


class ITaskRepository(Protocol):
    """Protocol for task persistence."""

    async def create_task(self, data: TaskCreate, created_by_id: int) -> TaskResult:
        """Insert a task owned by created_by_id."""

    async def get_task(self, task_id: int) -> TaskResult | None:
        """Return task by id, or None."""

    async def compare_and_set(
        self, expected: TaskResult, changes: dict[str, Any]
    ) -> TaskResult | None:
        """Write changes if status and assignee still match expected; None when they do not."""

    async def delete_task(self, task_id: int) -> bool:
        """Delete the task's notifications, then the task. False if the task was gone."""


class INotificationRepository(Protocol):
    """Protocol for notification persistence."""

    async def create_notification(self, data: NotificationCreate) -> NotificationResult:
        """Insert an unread notification."""

    async def list_recent(self, user_id: int, limit: int = 50) -> list[NotificationFeedItem]:
        """Most recent notifications for the recipient, newest first."""

    async def mark_read(self, notification_id: int, user_id: int) -> bool:
        """Mark one notification read; False when it does not belong to user_id."""

    async def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification read; return rows changed."""

    async def unread_count(self, user_id: int) -> int:
        """Number of unread notifications for user_id."""
