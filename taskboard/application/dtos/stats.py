"""DTOs for task statistics."""

from dataclasses import dataclass


@dataclass(frozen=True)
class TaskStats:
    """Counts over tasks a user created or is assigned."""

    total: int
    completed: int
    in_progress: int
    overdue: int


@dataclass(frozen=True)
class TeamMemberStats:
    """Counts over tasks assigned to one team member."""

    user_id: int
    username: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    overdue_tasks: int
