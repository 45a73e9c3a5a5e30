"""Notification read-side use cases for the recipient."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from taskboard.application.dtos.notification import NotificationFeed
from taskboard.application.interfaces.repositories import INotificationRepository
from taskboard.domain.exceptions import ResourceNotFoundException


class NotificationService:
    """Feed and read-state operations, always scoped to the requesting user."""

    def __init__(
        self,
        notification_repo: INotificationRepository,
        commit: Callable[[], Awaitable[None]],
        page_size: int = 50,
    ) -> None:
        self.notification_repo = notification_repo
        self._commit = commit
        self.page_size = page_size

    async def feed(self, user_id: int) -> NotificationFeed:
        """Most recent notifications plus the unread count."""
        items = await self.notification_repo.list_recent(user_id, limit=self.page_size)
        unread = await self.notification_repo.unread_count(user_id)
        return NotificationFeed(notifications=items, unread_count=unread)

    async def unread_count(self, user_id: int) -> int:
        return await self.notification_repo.unread_count(user_id)

    async def mark_read(self, user_id: int, notification_id: int) -> None:
        """Mark one notification read.

        Raises:
            ResourceNotFoundException: If it does not exist or belongs to someone else.
        """
        if not await self.notification_repo.mark_read(notification_id, user_id):
            raise ResourceNotFoundException("notification", notification_id)
        await self._commit()

    async def mark_all_read(self, user_id: int) -> int:
        """Mark every unread notification read. Returns rows changed (0 when repeated)."""
        changed = await self.notification_repo.mark_all_read(user_id)
        await self._commit()
        return changed
