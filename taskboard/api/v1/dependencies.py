"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the DB session, repositories, the current
user, the real-time channel and the application use cases. Routes depend
only on these, never on engines or sessions directly.
"""

from __future__ import annotations

from typing import Annotated, TypeVar

from fastapi import Depends, Query, Request, WebSocket
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.websocket import ConnectionRegistry, FanOutDispatcher, TaskEventPublisher
from taskboard.application.dtos.task import TaskFilters
from taskboard.application.dtos.user import UserResult
from taskboard.application.use_cases import NotificationService, TaskService
from taskboard.core.config import get_settings
from taskboard.domain.enums import DueDateBucket, TaskPriority, TaskStatus
from taskboard.domain.exceptions import AuthenticationException, ValidationException
from taskboard.infrastructure.persistence.database import get_db
from taskboard.infrastructure.persistence.repositories import (
    NotificationRepository,
    TaskRepository,
    UserRepository,
)
from taskboard.infrastructure.security.jwt import user_id_from_token

_http_bearer = HTTPBearer(auto_error=False)

StrEnumT = TypeVar("StrEnumT", TaskStatus, TaskPriority, DueDateBucket)

# Filter values the UI sends to mean "no filter"
ALL_STATUSES = "all_statuses"
ALL_PRIORITIES = "all_priorities"
ALL_DATES = "all_dates"


async def get_user_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserRepository:
    return UserRepository(db)


async def get_task_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TaskRepository:
    return TaskRepository(db)


async def get_notification_repo(
    db: Annotated[AsyncSession, Depends(get_db)],
) -> NotificationRepository:
    return NotificationRepository(db)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from the bearer JWT if present and valid; else None."""
    if not credentials:
        return None
    try:
        user_id = user_id_from_token(credentials.credentials)
    except ValueError:
        return None
    return await user_repo.get_user(user_id)


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise AuthenticationException()
    return current_user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]


def get_ws_registry(request: Request) -> ConnectionRegistry:
    """Connection registry from app.state (created in the app factory)."""
    return request.app.state.ws_registry


def get_ws_registry_for_socket(websocket: WebSocket) -> ConnectionRegistry:
    return websocket.app.state.ws_registry


def get_dispatcher(request: Request) -> FanOutDispatcher:
    """Fan-out dispatcher from app.state (created in the app factory)."""
    return request.app.state.ws_dispatcher


async def get_task_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    task_repo: Annotated[TaskRepository, Depends(get_task_repo)],
    notification_repo: Annotated[NotificationRepository, Depends(get_notification_repo)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
    dispatcher: Annotated[FanOutDispatcher, Depends(get_dispatcher)],
) -> TaskService:
    return TaskService(
        task_repo=task_repo,
        notification_repo=notification_repo,
        user_repo=user_repo,
        commit=db.commit,
        publisher=TaskEventPublisher(dispatcher),
    )


async def get_notification_service(
    db: Annotated[AsyncSession, Depends(get_db)],
    notification_repo: Annotated[NotificationRepository, Depends(get_notification_repo)],
) -> NotificationService:
    return NotificationService(
        notification_repo,
        commit=db.commit,
        page_size=get_settings().notifications_page_size,
    )


def _parse_choice(
    enum_cls: type[StrEnumT], value: str | None, sentinel: str, field: str
) -> StrEnumT | None:
    if value is None or value == "" or value == sentinel:
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join([sentinel, *enum_cls.values()])
        raise ValidationException(
            f"Invalid {field} '{value}'; expected one of: {allowed}", field=field
        ) from None


def get_task_filters(
    search: Annotated[str | None, Query(max_length=200)] = None,
    status: Annotated[str | None, Query()] = None,
    priority: Annotated[str | None, Query()] = None,
    due_date: Annotated[str | None, Query(alias="dueDate")] = None,
) -> TaskFilters:
    """Task list filters from query params. Sentinel values mean "no filter"."""
    search = search.strip() if search else None
    return TaskFilters(
        search=search or None,
        status=_parse_choice(TaskStatus, status, ALL_STATUSES, "status"),
        priority=_parse_choice(TaskPriority, priority, ALL_PRIORITIES, "priority"),
        due_date=_parse_choice(DueDateBucket, due_date, ALL_DATES, "dueDate"),
    )


def get_overdue_filters(
    filters: Annotated[TaskFilters, Depends(get_task_filters)],
) -> TaskFilters:
    """Same filters minus the due-date bucket, which the overdue view ignores."""
    return TaskFilters(search=filters.search, status=filters.status, priority=filters.priority)
