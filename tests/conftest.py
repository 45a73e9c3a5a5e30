"""Pytest configuration and fixtures for taskboard.

Tests run against an in-memory SQLite database (aiosqlite, one shared
connection). Environment is set before anything reads settings; tables are
created per test and the engine is disposed afterwards, so every test starts
from an empty database.
"""

import os

os.environ["SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["WS_REQUIRE_TOKEN"] = "false"

from collections.abc import AsyncIterator, Awaitable, Callable  # noqa: E402
from datetime import timedelta  # noqa: E402
from typing import Any  # noqa: E402

import pytest  # noqa: E402
from fastapi import FastAPI  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402
from starlette.websockets import WebSocketState  # noqa: E402

from taskboard.application.dtos.task import TaskCreate  # noqa: E402
from taskboard.application.dtos.user import UserResult  # noqa: E402
from taskboard.core.config import get_settings  # noqa: E402
from taskboard.domain.enums import TaskPriority  # noqa: E402
from taskboard.infrastructure.persistence.database import (  # noqa: E402
    dispose_engine,
    get_session_factory,
    init_models,
)
from taskboard.infrastructure.persistence.repositories import UserRepository  # noqa: E402
from taskboard.infrastructure.security.jwt import create_user_token  # noqa: E402
from taskboard.main import create_app  # noqa: E402
from taskboard.shared.utils.datetime import utc_now  # noqa: E402

get_settings.cache_clear()


class FakeTransport:
    """Stands in for a Starlette WebSocket: records frames, state is settable."""

    def __init__(self, *, fail: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = fail
        self.client_state = WebSocketState.CONNECTED
        self.application_state = WebSocketState.CONNECTED

    async def send_json(self, data: Any, mode: str = "text") -> None:
        if self.fail:
            raise RuntimeError("socket is gone")
        self.sent.append(data)

    def of_type(self, message_type: str) -> list[dict[str, Any]]:
        return [m for m in self.sent if m.get("type") == message_type]


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    """Factory for fake WebSocket transports."""
    return FakeTransport


@pytest.fixture
async def db() -> AsyncIterator[None]:
    """Fresh schema in the in-memory database; engine disposed after the test."""
    await init_models()
    yield
    await dispose_engine()


@pytest.fixture
async def session(db: None) -> AsyncIterator[AsyncSession]:
    """Session for repository and use-case tests."""
    async with get_session_factory()() as s:
        yield s


@pytest.fixture
def app() -> FastAPI:
    return create_app()


@pytest.fixture
async def client(db: None, app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Async HTTP client against the FastAPI app (ASGI)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def make_user(db: None) -> Callable[[str], Awaitable[UserResult]]:
    """Create and commit a user with password 'password123'."""

    async def _make(username: str) -> UserResult:
        async with get_session_factory()() as s:
            user = await UserRepository(s).create_user(username, "password123")
            await s.commit()
            return user

    return _make


def auth_headers(user: UserResult) -> dict[str, str]:
    """Bearer header for user."""
    return {"Authorization": f"Bearer {create_user_token(user.id, user.username)}"}


def task_create(assigned_to_id: int, **overrides: Any) -> TaskCreate:
    """A valid TaskCreate due tomorrow."""
    fields: dict[str, Any] = {
        "title": "Fix bug",
        "description": "Crashes on save",
        "due_date": utc_now() + timedelta(days=1),
        "priority": TaskPriority.HIGH,
        "assigned_to_id": assigned_to_id,
    }
    fields.update(overrides)
    return TaskCreate(**fields)
