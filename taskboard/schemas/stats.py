"""Task statistics schemas."""

from taskboard.schemas.common import CamelModel


class TaskStatsResponse(CamelModel):
    """Counts over the caller's created or assigned tasks."""

    total: int
    completed: int
    in_progress: int
    overdue: int


class TeamMemberStatsResponse(CamelModel):
    """Counts over the tasks assigned to one user."""

    user_id: int
    username: str
    total_tasks: int
    completed_tasks: int
    in_progress_tasks: int
    overdue_tasks: int
