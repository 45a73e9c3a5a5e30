"""SQLAlchemy mixins for common model patterns.

Provides: IntegerIdMixin, CreatedAtMixin, TimestampMixin and the enum_values
helper used by Enum columns.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer
from sqlalchemy.orm import Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

from taskboard.shared.utils.datetime import utc_now


class IntegerIdMixin:
    """Mixin for models with an auto-increment integer primary key."""

    @declared_attr
    def id(cls) -> Mapped[int]:
        return mapped_column(Integer, primary_key=True, autoincrement=True)


class CreatedAtMixin:
    """Mixin for created_at (client-side UTC default, server default as fallback)."""

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            nullable=False,
        )


class TimestampMixin(CreatedAtMixin):
    """Mixin for created_at and updated_at. Writers bump updated_at explicitly."""

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            server_default=func.now(),
            onupdate=utc_now,
            nullable=False,
        )


def enum_values(enum_cls: type) -> list[str]:
    """values_callable for sqlalchemy.Enum: persist enum values, not member names."""
    return [member.value for member in enum_cls]
