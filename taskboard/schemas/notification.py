"""Notification API schemas."""

from datetime import datetime

from taskboard.domain.enums import NotificationType
from taskboard.schemas.common import CamelModel


class NotificationResponse(CamelModel):
    """One feed entry with the sender's display name."""

    id: int
    task_id: int | None
    type: NotificationType
    message: str
    details: str
    is_read: bool
    created_at: datetime
    sender_name: str


class NotificationListResponse(CamelModel):
    """Most recent notifications plus the unread count."""

    notifications: list[NotificationResponse]
    unread_count: int


class UnreadCountResponse(CamelModel):
    count: int


class LiveNotificationPayload(CamelModel):
    """``data`` of a targeted ``notification`` WebSocket envelope."""

    id: int | None
    task_id: int
    title: str
    message: str
    type: NotificationType
