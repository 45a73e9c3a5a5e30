"""Development seed data against SQLite."""

from sqlalchemy import func, select

from scripts.seed_dev_data import DEMO_PASSWORD, SAMPLE_TASKS, seed
from taskboard.domain.enums import NotificationType, TaskStatus
from taskboard.infrastructure.persistence.database import get_session_factory
from taskboard.infrastructure.persistence.models import Notification, Task
from taskboard.infrastructure.persistence.repositories import (
    NotificationRepository,
    UserRepository,
)


async def test_seed_creates_users_tasks_and_notifications(db) -> None:
    summary = await seed(get_session_factory())

    assert summary.users_created == 5
    assert summary.tasks_created == len(SAMPLE_TASKS)
    assert summary.reminders_created == 2

    async with get_session_factory()() as s:
        statuses = set((await s.scalars(select(Task.status))).all())
        assert statuses == set(TaskStatus)

        john = await UserRepository(s).authenticate("john", DEMO_PASSWORD)
        assert john is not None

        feed = await NotificationRepository(s).list_recent(john.id)
        by_type = {t: [n for n in feed if n.type == t] for t in NotificationType}
        # taylor once, michael twice; john's own tasks notify nobody.
        assert sorted(n.sender_name for n in by_type[NotificationType.TASK_ASSIGNED]) == [
            "michael",
            "michael",
            "taylor",
        ]
        assert {n.details for n in by_type[NotificationType.TASK_OVERDUE]} == {
            "Fix critical security vulnerability is now overdue",
            "Prepare monthly performance report is now overdue",
        }
        assert by_type[NotificationType.TASK_UPDATED] == []


async def test_seed_is_repeatable(db) -> None:
    await seed(get_session_factory())
    again = await seed(get_session_factory())

    assert (again.users_created, again.tasks_created, again.reminders_created) == (0, 0, 0)
    async with get_session_factory()() as s:
        assert await s.scalar(select(func.count()).select_from(Task)) == len(SAMPLE_TASKS)
        assert await s.scalar(select(func.count()).select_from(Notification)) == 7
