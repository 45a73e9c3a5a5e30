"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserResult:
    """User read-model. Never carries the credential hash."""

    id: int
    username: str
    created_at: datetime
