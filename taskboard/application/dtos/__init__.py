"""Application DTOs (frozen dataclasses, no ORM dependency)."""

from taskboard.application.dtos.notification import (
    LiveNotice,
    NotificationCreate,
    NotificationFeed,
    NotificationFeedItem,
    NotificationResult,
)
from taskboard.application.dtos.stats import TaskStats, TeamMemberStats
from taskboard.application.dtos.task import (
    TaskCreate,
    TaskFilters,
    TaskListResult,
    TaskResult,
    TaskUpdate,
)
from taskboard.application.dtos.user import UserResult

__all__ = [
    "LiveNotice",
    "NotificationCreate",
    "NotificationFeed",
    "NotificationFeedItem",
    "NotificationResult",
    "TaskCreate",
    "TaskFilters",
    "TaskListResult",
    "TaskResult",
    "TaskStats",
    "TaskUpdate",
    "TeamMemberStats",
    "UserResult",
]
