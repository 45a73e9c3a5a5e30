"""Notification ORM model. Written only as a side-effect of task mutations."""

from sqlalchemy import Boolean, Enum, ForeignKey, Index, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.domain.enums import NotificationType
from taskboard.infrastructure.persistence.database import Base
from taskboard.infrastructure.persistence.models.mixins import (
    CreatedAtMixin,
    IntegerIdMixin,
    enum_values,
)


class Notification(IntegerIdMixin, CreatedAtMixin, Base):
    """Notification model. Table: notifications.

    task_id has no ON DELETE action: deleting a task must remove its
    notifications first.
    """

    __tablename__ = "notifications"

    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    sender_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    task_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("tasks.id"), nullable=True, index=True
    )
    type: Mapped[NotificationType] = mapped_column(
        Enum(
            NotificationType,
            name="notification_type",
            values_callable=enum_values,
        ),
        nullable=False,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    __table_args__ = (
        Index("ix_notifications_user_read", "user_id", "is_read"),
    )
