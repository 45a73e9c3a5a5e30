"""DTOs for notification use cases (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from taskboard.domain.enums import NotificationType


@dataclass(frozen=True)
class NotificationCreate:
    """Notification synthesized by a task mutation."""

    user_id: int
    sender_id: int
    task_id: int | None
    type: NotificationType
    message: str
    details: str | None = None


@dataclass(frozen=True)
class NotificationResult:
    """Stored notification."""

    id: int
    user_id: int
    sender_id: int
    task_id: int | None
    type: NotificationType
    message: str
    details: str | None
    is_read: bool
    created_at: datetime


@dataclass(frozen=True)
class NotificationFeedItem:
    """Notification as listed to its recipient, joined with the sender's name."""

    id: int
    task_id: int | None
    type: NotificationType
    message: str
    details: str
    is_read: bool
    created_at: datetime
    sender_name: str


@dataclass(frozen=True)
class NotificationFeed:
    """Most recent notifications plus the recipient's unread count."""

    notifications: list[NotificationFeedItem]
    unread_count: int


@dataclass(frozen=True)
class LiveNotice:
    """Targeted real-time message for one recipient of a task mutation.

    notification_id is set when the mutation also persisted a notification
    for this recipient.
    """

    recipient_id: int
    task_id: int
    title: str
    message: str
    type: NotificationType
    notification_id: int | None = None
