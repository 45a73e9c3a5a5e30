"""User ORM model for authentication and assignment."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.infrastructure.persistence.database import Base
from taskboard.infrastructure.persistence.models.mixins import CreatedAtMixin, IntegerIdMixin


class User(IntegerIdMixin, CreatedAtMixin, Base):
    """User model. Table: users. Username is unique."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    hashed_password: Mapped[str] = mapped_column(String, nullable=False)
