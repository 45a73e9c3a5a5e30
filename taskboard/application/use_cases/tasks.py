"""Task mutation use cases: authorization, compare-and-set writes, notifications.

Each mutation persists its notification rows in the same session as the task
write, commits, and only then hands live notices to the event publisher, so
clients never observe state that was rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from taskboard.application.dtos.notification import LiveNotice, NotificationCreate
from taskboard.application.dtos.task import TaskCreate, TaskResult, TaskUpdate
from taskboard.application.dtos.user import UserResult
from taskboard.application.interfaces.repositories import (
    INotificationRepository,
    ITaskRepository,
    IUserRepository,
)
from taskboard.application.interfaces.services import ITaskEventPublisher
from taskboard.domain.enums import NotificationType, TaskAction, TaskStatus
from taskboard.domain.exceptions import (
    AuthorizationException,
    ConcurrentUpdateException,
    ResourceNotFoundException,
    ValidationException,
)

logger = logging.getLogger(__name__)

MAX_WRITE_ATTEMPTS = 3


class TaskService:
    """Task mutations on behalf of an authenticated actor."""

    def __init__(
        self,
        task_repo: ITaskRepository,
        notification_repo: INotificationRepository,
        user_repo: IUserRepository,
        commit: Callable[[], Awaitable[None]],
        publisher: ITaskEventPublisher | None = None,
    ) -> None:
        self.task_repo = task_repo
        self.notification_repo = notification_repo
        self.user_repo = user_repo
        self._commit = commit
        self.publisher = publisher

    async def get_task(self, task_id: int) -> TaskResult:
        """Return task or raise ResourceNotFoundException."""
        task = await self.task_repo.get_task(task_id)
        if not task:
            raise ResourceNotFoundException("task", task_id)
        return task

    async def create_task(self, actor: UserResult, data: TaskCreate) -> TaskResult:
        """Create a task owned by actor; notify the assignee when it is someone else."""
        await self._require_user(data.assigned_to_id)
        task = await self.task_repo.create_task(data, actor.id)

        notices: list[LiveNotice] = []
        if task.assigned_to_id != actor.id:
            notification = await self.notification_repo.create_notification(
                NotificationCreate(
                    user_id=task.assigned_to_id,
                    sender_id=actor.id,
                    task_id=task.id,
                    type=NotificationType.TASK_ASSIGNED,
                    message=f"{actor.username} assigned you a new task",
                    details=task.title,
                )
            )
            notices.append(
                LiveNotice(
                    recipient_id=task.assigned_to_id,
                    task_id=task.id,
                    title=task.title,
                    message=f"You have been assigned a new task: {task.title}",
                    type=NotificationType.TASK_ASSIGNED,
                    notification_id=notification.id,
                )
            )

        await self._commit()
        logger.info("Task %s created by user %s", task.id, actor.id)
        await self._publish(TaskAction.CREATED, task, notices)
        return task

    async def update_task(
        self, actor: UserResult, task_id: int, data: TaskUpdate
    ) -> TaskResult:
        """Apply a partial update. Changing the assignee is creator-only."""
        changes = data.changes()
        if "assigned_to_id" in changes:
            await self._require_user(changes["assigned_to_id"])

        def authorize(current: TaskResult) -> None:
            self._require_participant(actor, current, "update")
            if (
                "assigned_to_id" in changes
                and changes["assigned_to_id"] != current.assigned_to_id
            ):
                self._require_creator(actor, current, "reassign")

        before, after = await self._write(task_id, changes, authorize)
        persisted = await self._record_transition(
            actor, before, after, reassigned=after.assigned_to_id != before.assigned_to_id
        )

        recipients = {after.created_by_id, before.assigned_to_id, after.assigned_to_id}
        notices = self._notices(
            recipients - {actor.id},
            after,
            persisted,
            message=f'Task "{after.title}" has been updated',
        )

        await self._commit()
        await self._publish(TaskAction.UPDATED, after, notices)
        return after

    async def update_status(
        self, actor: UserResult, task_id: int, status: TaskStatus
    ) -> TaskResult:
        """Move a task to another status. Creator or assignee only."""

        def authorize(current: TaskResult) -> None:
            self._require_participant(actor, current, "update")

        before, after = await self._write(task_id, {"status": status}, authorize)
        persisted = await self._record_transition(actor, before, after, reassigned=False)

        if after.status == TaskStatus.DONE:
            message = f'Task "{after.title}" has been completed'
        else:
            message = f'Task "{after.title}" has been moved to {after.status.value}'
        notices = self._notices(
            {after.created_by_id, after.assigned_to_id} - {actor.id},
            after,
            persisted,
            message=message,
        )

        await self._commit()
        await self._publish(TaskAction.STATUS_UPDATED, after, notices)
        return after

    async def update_assignee(
        self, actor: UserResult, task_id: int, assigned_to_id: int
    ) -> TaskResult:
        """Reassign a task. Creator only; the new assignee is always notified."""

        def authorize(current: TaskResult) -> None:
            self._require_creator(actor, current, "reassign")

        current = await self.get_task(task_id)
        authorize(current)
        await self._require_user(assigned_to_id)

        before, after = await self._write(
            task_id, {"assigned_to_id": assigned_to_id}, authorize
        )
        persisted = await self._record_transition(actor, before, after, reassigned=True)
        notices = self._notices(
            {after.assigned_to_id} - {actor.id},
            after,
            persisted,
            message=f"You have been assigned a task: {after.title}",
            type=NotificationType.TASK_ASSIGNED,
        )

        await self._commit()
        await self._publish(TaskAction.ASSIGNEE_UPDATED, after, notices)
        return after

    async def delete_task(self, actor: UserResult, task_id: int) -> None:
        """Delete a task and its notifications. Creator only."""
        task = await self.get_task(task_id)
        self._require_creator(actor, task, "delete")
        if not await self.task_repo.delete_task(task_id):
            raise ResourceNotFoundException("task", task_id)

        notices = self._notices(
            {task.assigned_to_id} - {actor.id},
            task,
            {},
            message=f'Task "{task.title}" has been deleted',
        )

        await self._commit()
        logger.info("Task %s deleted by user %s", task_id, actor.id)
        await self._publish(TaskAction.DELETED, task, notices)

    async def _write(
        self,
        task_id: int,
        changes: dict[str, Any],
        authorize: Callable[[TaskResult], None],
    ) -> tuple[TaskResult, TaskResult]:
        """Read, authorize and conditionally write; re-read on a lost race.

        Returns the state the successful write was conditioned on and the
        state after it.
        """
        for attempt in range(1, MAX_WRITE_ATTEMPTS + 1):
            current = await self.get_task(task_id)
            authorize(current)
            updated = await self.task_repo.compare_and_set(current, changes)
            if updated is not None:
                return current, updated
            logger.debug("Task %s changed during write (attempt %d)", task_id, attempt)
        logger.warning(
            "Task %s update abandoned after %d attempts", task_id, MAX_WRITE_ATTEMPTS
        )
        raise ConcurrentUpdateException(task_id)

    async def _record_transition(
        self,
        actor: UserResult,
        before: TaskResult,
        after: TaskResult,
        *,
        reassigned: bool,
    ) -> dict[int, LiveNotice]:
        """Persist assignment and completion notifications for one observed write.

        Returns the persisted notices keyed by recipient id.
        """
        persisted: dict[int, LiveNotice] = {}

        if reassigned:
            notification = await self.notification_repo.create_notification(
                NotificationCreate(
                    user_id=after.assigned_to_id,
                    sender_id=actor.id,
                    task_id=after.id,
                    type=NotificationType.TASK_ASSIGNED,
                    message=f"{actor.username} assigned you a task",
                    details=after.title,
                )
            )
            persisted[after.assigned_to_id] = LiveNotice(
                recipient_id=after.assigned_to_id,
                task_id=after.id,
                title=after.title,
                message=f"You have been assigned a task: {after.title}",
                type=NotificationType.TASK_ASSIGNED,
                notification_id=notification.id,
            )

        completed = before.status != TaskStatus.DONE and after.status == TaskStatus.DONE
        if completed and after.assigned_to_id != after.created_by_id:
            assignee = await self.user_repo.get_user(after.assigned_to_id)
            assignee_name = assignee.username if assignee else "Someone"
            notification = await self.notification_repo.create_notification(
                NotificationCreate(
                    user_id=after.created_by_id,
                    sender_id=after.assigned_to_id,
                    task_id=after.id,
                    type=NotificationType.TASK_UPDATED,
                    message=f"{assignee_name} completed a task",
                    details=after.title,
                )
            )
            persisted[after.created_by_id] = LiveNotice(
                recipient_id=after.created_by_id,
                task_id=after.id,
                title=after.title,
                message=f'Task "{after.title}" has been completed',
                type=NotificationType.TASK_UPDATED,
                notification_id=notification.id,
            )

        return persisted

    @staticmethod
    def _notices(
        recipients: set[int],
        task: TaskResult,
        persisted: dict[int, LiveNotice],
        *,
        message: str,
        type: NotificationType = NotificationType.TASK_UPDATED,
    ) -> list[LiveNotice]:
        """One notice per recipient, preferring the one backed by a stored notification."""
        return [
            persisted.get(recipient)
            or LiveNotice(
                recipient_id=recipient,
                task_id=task.id,
                title=task.title,
                message=message,
                type=type,
            )
            for recipient in sorted(recipients)
        ]

    async def _publish(
        self, action: TaskAction, task: TaskResult, notices: list[LiveNotice]
    ) -> None:
        if self.publisher is not None:
            await self.publisher.task_changed(action, task, notices)

    async def _require_user(self, user_id: int) -> None:
        if not await self.user_repo.exists(user_id):
            raise ValidationException("Assigned user does not exist", field="assignedToId")

    @staticmethod
    def _require_participant(actor: UserResult, task: TaskResult, action: str) -> None:
        if not task.involves(actor.id):
            raise AuthorizationException(
                f"You don't have permission to {action} this task",
                resource="task",
                action=action,
            )

    @staticmethod
    def _require_creator(actor: UserResult, task: TaskResult, action: str) -> None:
        if task.created_by_id != actor.id:
            raise AuthorizationException(
                f"Only the task creator can {action} this task",
                resource="task",
                action=action,
            )
