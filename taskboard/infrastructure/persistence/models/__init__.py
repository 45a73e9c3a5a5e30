"""ORM models. Importing this package registers every table on Base.metadata."""

from taskboard.infrastructure.persistence.models.notification import Notification
from taskboard.infrastructure.persistence.models.task import Task
from taskboard.infrastructure.persistence.models.user import User

__all__ = ["Notification", "Task", "User"]
