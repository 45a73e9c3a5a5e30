"""Seed demo users, tasks and notifications for local development.

Creates the demo users when missing and, when the task table is empty, a set
of sample tasks across every status and priority. Tasks go through TaskService
so assignment notifications are stored exactly as for API-created tasks;
overdue reminders are added for late, unfinished tasks.

Usage:
    python -m scripts.seed_dev_data

Requires: DATABASE_URL (defaults to the local SQLite file). Tables are created
if they do not exist yet.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from taskboard.application.dtos.notification import NotificationCreate
from taskboard.application.dtos.task import TaskCreate
from taskboard.application.dtos.user import UserResult
from taskboard.application.use_cases.tasks import TaskService
from taskboard.core.config import get_settings
from taskboard.domain.enums import NotificationType, TaskPriority, TaskStatus
from taskboard.infrastructure.persistence.database import (
    dispose_engine,
    get_session_factory,
    init_models,
)
from taskboard.infrastructure.persistence.models import Task
from taskboard.infrastructure.persistence.repositories import (
    NotificationRepository,
    TaskRepository,
    UserRepository,
)
from taskboard.infrastructure.persistence.repositories.user_repo import user_to_result
from taskboard.shared.utils.datetime import utc_now

DEMO_PASSWORD = "password123"
DEMO_USERNAMES = ("john", "emma", "michael", "taylor", "robert")


@dataclass(frozen=True)
class SampleTask:
    title: str
    description: str
    due_in_days: int
    priority: TaskPriority
    status: TaskStatus
    created_by: str
    assigned_to: str


SAMPLE_TASKS = (
    SampleTask(
        "Complete UI redesign for client dashboard",
        "Update all UI components to match new brand guidelines and improve user experience",
        1, TaskPriority.HIGH, TaskStatus.IN_PROGRESS, "taylor", "john",
    ),
    SampleTask(
        "Implement authentication API",
        "Create secure user registration and login endpoints with JWT authentication",
        3, TaskPriority.MEDIUM, TaskStatus.TODO, "michael", "john",
    ),
    SampleTask(
        "Create documentation for API endpoints",
        "Document all API endpoints, parameters, and response formats using Swagger",
        5, TaskPriority.LOW, TaskStatus.REVIEW, "john", "john",
    ),
    SampleTask(
        "Design marketing emails for product launch",
        "Create responsive email templates for product announcement campaign",
        -2, TaskPriority.HIGH, TaskStatus.DONE, "john", "emma",
    ),
    SampleTask(
        "Implement frontend form validations",
        "Add client-side validation to registration and onboarding forms",
        7, TaskPriority.MEDIUM, TaskStatus.IN_PROGRESS, "john", "robert",
    ),
    SampleTask(
        "Fix critical security vulnerability",
        "Address security issues identified in the latest penetration testing report",
        -2, TaskPriority.HIGH, TaskStatus.IN_PROGRESS, "john", "john",
    ),
    SampleTask(
        "Prepare monthly performance report",
        "Compile data and create report on team performance metrics for Q2",
        -3, TaskPriority.HIGH, TaskStatus.TODO, "michael", "john",
    ),
)


@dataclass(frozen=True)
class SeedSummary:
    users_created: int
    tasks_created: int
    reminders_created: int


async def _ensure_users(session: AsyncSession) -> tuple[dict[str, UserResult], int]:
    repo = UserRepository(session)
    users: dict[str, UserResult] = {}
    created = 0
    for username in DEMO_USERNAMES:
        existing = await repo.get_by_username(username)
        if existing:
            users[username] = user_to_result(existing)
            continue
        users[username] = await repo.create_user(username, DEMO_PASSWORD)
        created += 1
        print(f"Created user: {username}")
    await session.commit()
    return users, created


async def seed(session_factory: async_sessionmaker[AsyncSession]) -> SeedSummary:
    """Insert demo data. Safe to run repeatedly; existing data is left alone."""
    async with session_factory() as session:
        users, users_created = await _ensure_users(session)

        task_count = await session.scalar(select(func.count()).select_from(Task))
        if task_count:
            print(f"Tasks already present ({task_count}), skipping sample tasks")
            return SeedSummary(users_created, 0, 0)

        service = TaskService(
            task_repo=TaskRepository(session),
            notification_repo=NotificationRepository(session),
            user_repo=UserRepository(session),
            commit=session.commit,
        )
        notification_repo = NotificationRepository(session)
        now = utc_now()
        reminders = 0
        for sample in SAMPLE_TASKS:
            task = await service.create_task(
                users[sample.created_by],
                TaskCreate(
                    title=sample.title,
                    description=sample.description,
                    due_date=now + timedelta(days=sample.due_in_days),
                    priority=sample.priority,
                    status=sample.status,
                    assigned_to_id=users[sample.assigned_to].id,
                ),
            )
            print(f"Created task: {task.title}")

            if task.due_date < now and task.status != TaskStatus.DONE:
                await notification_repo.create_notification(
                    NotificationCreate(
                        user_id=task.assigned_to_id,
                        sender_id=task.assigned_to_id,
                        task_id=task.id,
                        type=NotificationType.TASK_OVERDUE,
                        message="Task overdue reminder",
                        details=f"{task.title} is now overdue",
                    )
                )
                reminders += 1
        await session.commit()
        return SeedSummary(users_created, len(SAMPLE_TASKS), reminders)


async def run() -> None:
    get_settings()
    await init_models()
    try:
        summary = await seed(get_session_factory())
    finally:
        await dispose_engine()
    print(
        f"Seed completed: {summary.users_created} users, "
        f"{summary.tasks_created} tasks, {summary.reminders_created} overdue reminders."
    )


def main() -> None:
    asyncio.run(run())


if __name__ == "__main__":
    main()
