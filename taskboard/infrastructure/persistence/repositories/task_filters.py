"""Task list filters: one pure narrowing function shared by every list query.

``apply_task_filters`` only adds WHERE clauses to the statement it is given;
it never reorders or executes, so the assigned/created/overdue queries narrow
identically regardless of call site.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import Select, and_, or_

from taskboard.application.dtos.task import TaskFilters
from taskboard.domain.enums import DueDateBucket, TaskStatus
from taskboard.infrastructure.persistence.models.task import Task
from taskboard.shared.utils.datetime import (
    end_of_day,
    end_of_week,
    start_of_day,
    start_of_week,
)


LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Make LIKE metacharacters in user input match literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def due_date_window(bucket: DueDateBucket, now: datetime) -> tuple[datetime, datetime]:
    """Inclusive [start, end] window of a calendar bucket (weeks start on Sunday).

    Raises:
        ValueError: For OVERDUE, which is open-ended and status-dependent.
    """
    if bucket is DueDateBucket.TODAY:
        return start_of_day(now), end_of_day(now)
    if bucket is DueDateBucket.THIS_WEEK:
        return start_of_week(now), end_of_week(now)
    if bucket is DueDateBucket.NEXT_WEEK:
        next_week = now + timedelta(days=7)
        return start_of_week(next_week), end_of_week(next_week)
    raise ValueError(f"{bucket.value} has no fixed window")


def overdue_clause(now: datetime):
    """Due strictly before now and not done."""
    return and_(Task.due_date < now, Task.status != TaskStatus.DONE)


def apply_task_filters(
    stmt: Select,
    filters: TaskFilters,
    *,
    now: datetime,
) -> Select:
    """Return stmt narrowed by filters. Unset filters add nothing."""
    if filters.search and filters.search.strip():
        term = f"%{escape_like(filters.search.strip())}%"
        stmt = stmt.where(
            or_(
                Task.title.ilike(term, escape=LIKE_ESCAPE),
                Task.description.ilike(term, escape=LIKE_ESCAPE),
            )
        )

    if filters.status is not None:
        stmt = stmt.where(Task.status == filters.status)

    if filters.priority is not None:
        stmt = stmt.where(Task.priority == filters.priority)

    if filters.due_date is not None:
        if filters.due_date is DueDateBucket.OVERDUE:
            stmt = stmt.where(overdue_clause(now))
        else:
            start, end = due_date_window(filters.due_date, now)
            stmt = stmt.where(Task.due_date >= start, Task.due_date <= end)

    return stmt
