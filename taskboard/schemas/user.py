"""User API schemas."""

from datetime import datetime

from taskboard.schemas.common import CamelModel


class UserResponse(CamelModel):
    """User response (no password)."""

    id: int
    username: str
    created_at: datetime
