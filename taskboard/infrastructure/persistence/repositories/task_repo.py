"""Task repository: CRUD, compare-and-set writes, filtered lists and stats.

Notification side-effects are decided by the task use cases; this module
only guarantees that writes are conditional on the state the caller read,
and that deleting a task removes its notifications first.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, Select, case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.application.dtos.stats import TaskStats, TeamMemberStats
from taskboard.application.dtos.task import (
    TaskCreate,
    TaskFilters,
    TaskListResult,
    TaskResult,
)
from taskboard.domain.enums import TaskStatus
from taskboard.infrastructure.persistence.models.notification import Notification
from taskboard.infrastructure.persistence.models.task import Task
from taskboard.infrastructure.persistence.models.user import User
from taskboard.infrastructure.persistence.repositories.base import BaseRepository
from taskboard.infrastructure.persistence.repositories.task_filters import (
    apply_task_filters,
    overdue_clause,
)
from taskboard.infrastructure.persistence.repositories.user_repo import UserRepository
from taskboard.shared.utils.datetime import ensure_utc, utc_now


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        title=t.title,
        description=t.description,
        due_date=ensure_utc(t.due_date),
        priority=t.priority,
        status=t.status,
        created_by_id=t.created_by_id,
        assigned_to_id=t.assigned_to_id,
        created_at=ensure_utc(t.created_at),
        updated_at=ensure_utc(t.updated_at),
    )


def _count_where(condition: ColumnElement[bool]) -> Any:
    return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


class TaskRepository(BaseRepository[Task]):
    """Task repository."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Task)

    async def create_task(self, data: TaskCreate, created_by_id: int) -> TaskResult:
        """Insert a task owned by created_by_id."""
        now = utc_now()
        task = Task(
            title=data.title,
            description=data.description,
            due_date=ensure_utc(data.due_date),
            priority=data.priority,
            status=data.status,
            created_by_id=created_by_id,
            assigned_to_id=data.assigned_to_id,
            created_at=now,
            updated_at=now,
        )
        return _to_result(await self.create(task))

    async def get_task(self, task_id: int) -> TaskResult | None:
        result = await self.db.execute(
            select(Task).where(Task.id == task_id).execution_options(populate_existing=True)
        )
        task = result.scalar_one_or_none()
        return _to_result(task) if task else None

    async def compare_and_set(
        self,
        expected: TaskResult,
        changes: dict[str, Any],
    ) -> TaskResult | None:
        """Apply changes only if status and assignee still match ``expected``.

        Always bumps updated_at. Returns the updated task, or None when the
        row changed (or vanished) since ``expected`` was read.
        """
        values = dict(changes)
        if "due_date" in values:
            values["due_date"] = ensure_utc(values["due_date"])
        values["updated_at"] = utc_now()
        result = await self.db.execute(
            update(Task)
            .where(
                Task.id == expected.id,
                Task.status == expected.status,
                Task.assigned_to_id == expected.assigned_to_id,
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return None
        return await self.get_task(expected.id)

    async def delete_task(self, task_id: int) -> bool:
        """Delete notifications referencing the task, then the task itself."""
        await self.db.execute(
            delete(Notification)
            .where(Notification.task_id == task_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(
            delete(Task).where(Task.id == task_id).execution_options(synchronize_session=False)
        )
        return result.rowcount > 0

    async def _list(
        self,
        stmt: Select,
        filters: TaskFilters,
        now: datetime,
    ) -> TaskListResult:
        stmt = apply_task_filters(stmt, filters, now=now)
        result = await self.db.execute(stmt)
        tasks = [_to_result(t) for t in result.scalars().all()]
        user_ids = {t.created_by_id for t in tasks} | {t.assigned_to_id for t in tasks}
        users = await UserRepository(self.db).get_many(user_ids)
        return TaskListResult(tasks=tasks, users=users)

    async def list_assigned(
        self,
        user_id: int,
        filters: TaskFilters | None = None,
        *,
        now: datetime | None = None,
    ) -> TaskListResult:
        """Tasks assigned to user_id, most recently updated first."""
        stmt = (
            select(Task)
            .where(Task.assigned_to_id == user_id)
            .order_by(Task.updated_at.desc(), Task.id.desc())
        )
        return await self._list(stmt, filters or TaskFilters(), now or utc_now())

    async def list_created(
        self,
        user_id: int,
        filters: TaskFilters | None = None,
        *,
        now: datetime | None = None,
    ) -> TaskListResult:
        """Tasks created by user_id, most recently updated first."""
        stmt = (
            select(Task)
            .where(Task.created_by_id == user_id)
            .order_by(Task.updated_at.desc(), Task.id.desc())
        )
        return await self._list(stmt, filters or TaskFilters(), now or utc_now())

    async def list_overdue(
        self,
        user_id: int,
        filters: TaskFilters | None = None,
        *,
        now: datetime | None = None,
    ) -> TaskListResult:
        """Overdue tasks the user created or is assigned, soonest-overdue first."""
        now = now or utc_now()
        stmt = (
            select(Task)
            .where(
                overdue_clause(now),
                or_(Task.assigned_to_id == user_id, Task.created_by_id == user_id),
            )
            .order_by(Task.due_date.asc(), Task.id.asc())
        )
        return await self._list(stmt, filters or TaskFilters(), now)

    async def stats_for_user(self, user_id: int, *, now: datetime | None = None) -> TaskStats:
        """Counts over tasks user_id created or is assigned."""
        now = now or utc_now()
        stmt = select(
            func.count(Task.id),
            _count_where(Task.status == TaskStatus.DONE),
            _count_where(Task.status == TaskStatus.IN_PROGRESS),
            _count_where(overdue_clause(now)),
        ).where(or_(Task.assigned_to_id == user_id, Task.created_by_id == user_id))
        total, completed, in_progress, overdue = (await self.db.execute(stmt)).one()
        return TaskStats(
            total=int(total),
            completed=int(completed),
            in_progress=int(in_progress),
            overdue=int(overdue),
        )

    async def team_stats(self, *, now: datetime | None = None) -> list[TeamMemberStats]:
        """Per-user counts over assigned tasks, one row per user ordered by username."""
        now = now or utc_now()
        stmt = (
            select(
                User.id,
                User.username,
                func.count(Task.id),
                _count_where(Task.status == TaskStatus.DONE),
                _count_where(Task.status == TaskStatus.IN_PROGRESS),
                _count_where(overdue_clause(now)),
            )
            .select_from(User)
            .outerjoin(Task, Task.assigned_to_id == User.id)
            .group_by(User.id, User.username)
            .order_by(User.username.asc())
        )
        result = await self.db.execute(stmt)
        return [
            TeamMemberStats(
                user_id=user_id,
                username=username,
                total_tasks=int(total),
                completed_tasks=int(completed),
                in_progress_tasks=int(in_progress),
                overdue_tasks=int(overdue),
            )
            for user_id, username, total, completed, in_progress, overdue in result.all()
        ]
