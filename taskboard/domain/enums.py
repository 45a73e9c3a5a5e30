"""Domain enumerations for the task board.

Enums represent the fixed value sets stored in the database and exchanged
on the wire (task status/priority, notification type, filter buckets).
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class TaskStatus(_ValuesMixin, str, Enum):
    """Task workflow status."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class NotificationType(_ValuesMixin, str, Enum):
    """Kind of event a notification records."""

    TASK_ASSIGNED = "task_assigned"
    TASK_UPDATED = "task_updated"
    TASK_OVERDUE = "task_overdue"


class DueDateBucket(_ValuesMixin, str, Enum):
    """Named relative due-date window used by list filters."""

    TODAY = "today"
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"
    OVERDUE = "overdue"


class TaskAction(_ValuesMixin, str, Enum):
    """Action tag carried by broadcast task-update envelopes."""

    CREATED = "created"
    UPDATED = "updated"
    STATUS_UPDATED = "status_updated"
    ASSIGNEE_UPDATED = "assignee_updated"
    DELETED = "deleted"
