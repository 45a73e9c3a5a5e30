"""Notification repository: creation, recipient feed, read-state and unread counts.

Read state only moves false -> true through this repository.
"""

from __future__ import annotations

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.application.dtos.notification import (
    NotificationCreate,
    NotificationFeedItem,
    NotificationResult,
)
from taskboard.infrastructure.persistence.models.notification import Notification
from taskboard.infrastructure.persistence.models.user import User
from taskboard.infrastructure.persistence.repositories.base import BaseRepository
from taskboard.shared.utils.datetime import ensure_utc


def _to_result(n: Notification) -> NotificationResult:
    """Map Notification ORM to NotificationResult DTO."""
    return NotificationResult(
        id=n.id,
        user_id=n.user_id,
        sender_id=n.sender_id,
        task_id=n.task_id,
        type=n.type,
        message=n.message,
        details=n.details,
        is_read=n.is_read,
        created_at=ensure_utc(n.created_at),
    )


class NotificationRepository(BaseRepository[Notification]):
    """Notification repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Notification)

    async def create_notification(self, data: NotificationCreate) -> NotificationResult:
        """Insert an unread notification."""
        notification = Notification(
            user_id=data.user_id,
            sender_id=data.sender_id,
            task_id=data.task_id,
            type=data.type,
            message=data.message,
            details=data.details,
            is_read=False,
        )
        return _to_result(await self.create(notification))

    async def list_recent(self, user_id: int, limit: int = 50) -> list[NotificationFeedItem]:
        """Most recent notifications for the recipient, newest first, with sender name."""
        stmt = (
            select(Notification, User.username)
            .join(User, Notification.sender_id == User.id)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [
            NotificationFeedItem(
                id=n.id,
                task_id=n.task_id,
                type=n.type,
                message=n.message,
                details=n.details or "",
                is_read=n.is_read,
                created_at=ensure_utc(n.created_at),
                sender_name=sender_name,
            )
            for n, sender_name in result.all()
        ]

    async def mark_read(self, notification_id: int, user_id: int) -> bool:
        """Mark one notification read. False when it does not belong to user_id."""
        result = await self.db.execute(
            update(Notification)
            .where(Notification.id == notification_id, Notification.user_id == user_id)
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification of user_id read. Returns rows changed."""
        result = await self.db.execute(
            update(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
            .values(is_read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def unread_count(self, user_id: int) -> int:
        result = await self.db.execute(
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.is_read.is_(False))
        )
        return int(result.scalar_one())
