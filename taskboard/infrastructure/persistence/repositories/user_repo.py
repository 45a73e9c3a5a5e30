"""User repository with password helpers. Public methods return application DTOs."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.application.dtos.user import UserResult
from taskboard.domain.exceptions import UserAlreadyExistsException
from taskboard.infrastructure.persistence.models.user import User
from taskboard.infrastructure.persistence.repositories.base import BaseRepository
from taskboard.infrastructure.security.password import hash_password, verify_password
from taskboard.shared.utils.datetime import ensure_utc

# Lazy dummy hash for constant-time comparison when user is not found (timing-attack mitigation).
# Computed on first use in a thread to avoid blocking the event loop at import.
_dummy_hash_cache: str | None = None


async def _get_dummy_hash() -> str:
    """Return a valid bcrypt hash for dummy comparison; computed once in thread pool."""
    global _dummy_hash_cache
    if _dummy_hash_cache is None:
        _dummy_hash_cache = await asyncio.to_thread(
            hash_password, "not-a-real-password"
        )
    return _dummy_hash_cache


def user_to_result(u: User) -> UserResult:
    """Map ORM User to application UserResult (no password)."""
    return UserResult(id=u.id, username=u.username, created_at=ensure_utc(u.created_at))


class UserRepository(BaseRepository[User]):
    """User repository. authenticate, create_user, lookups for assignment and listings."""

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def get_by_username(self, username: str) -> User | None:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def get_user(self, user_id: int) -> UserResult | None:
        user = await self.get_by_id(user_id)
        return user_to_result(user) if user else None

    async def exists(self, user_id: int) -> bool:
        result = await self.db.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    async def authenticate(self, username: str, password: str) -> UserResult | None:
        user = await self.get_by_username(username)
        if not user:
            dummy_hash = await _get_dummy_hash()
            await asyncio.to_thread(verify_password, password, dummy_hash)
            return None
        if not await asyncio.to_thread(verify_password, password, user.hashed_password):
            return None
        return user_to_result(user)

    async def create_user(self, username: str, password: str) -> UserResult:
        """Create user; raise UserAlreadyExistsException on unique constraint violation."""
        if await self.get_by_username(username) is not None:
            raise UserAlreadyExistsException()
        hashed = await asyncio.to_thread(hash_password, password)
        try:
            created = await self.create(User(username=username, hashed_password=hashed))
        except IntegrityError:
            raise UserAlreadyExistsException() from None
        return user_to_result(created)

    async def list_users(self) -> list[UserResult]:
        """All users ordered by username (assignment pickers)."""
        result = await self.db.execute(select(User).order_by(User.username.asc()))
        return [user_to_result(u) for u in result.scalars().all()]

    async def get_many(self, user_ids: Iterable[int]) -> dict[int, UserResult]:
        """Return users keyed by id; unknown ids are omitted."""
        ids = set(user_ids)
        if not ids:
            return {}
        result = await self.db.execute(select(User).where(User.id.in_(ids)))
        return {u.id: user_to_result(u) for u in result.scalars().all()}
