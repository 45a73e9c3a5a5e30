"""Persistence repositories. Re-exports for dependency injection."""

from taskboard.infrastructure.persistence.repositories.base import BaseRepository
from taskboard.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from taskboard.infrastructure.persistence.repositories.task_repo import TaskRepository
from taskboard.infrastructure.persistence.repositories.user_repo import UserRepository

__all__ = [
    "BaseRepository",
    "NotificationRepository",
    "TaskRepository",
    "UserRepository",
]
