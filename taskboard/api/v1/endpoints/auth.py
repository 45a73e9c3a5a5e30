"""Auth API: register, login and the current user.

Login and register are rate limited per client address (slowapi).
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.api.v1.dependencies import CurrentUser, get_user_repo
from taskboard.application.dtos.user import UserResult
from taskboard.core.limiter import limit_auth
from taskboard.domain.exceptions import AuthenticationException
from taskboard.infrastructure.persistence.database import get_db
from taskboard.infrastructure.persistence.repositories.user_repo import UserRepository
from taskboard.infrastructure.security.jwt import create_user_token
from taskboard.schemas.auth import AuthResponse, CredentialsRequest
from taskboard.schemas.user import UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def _auth_response(user: UserResult) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        access_token=create_user_token(user.id, user.username),
    )


@router.post("/register", response_model=AuthResponse, status_code=201)
@limit_auth
async def register(
    request: Request,
    body: CredentialsRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> AuthResponse:
    """Create an account and return it with an access token."""
    user = await user_repo.create_user(body.username, body.password)
    await db.commit()
    logger.info("User %s registered", user.id)
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
@limit_auth
async def login(
    request: Request,
    body: CredentialsRequest,
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> AuthResponse:
    """Exchange username and password for an access token."""
    user = await user_repo.authenticate(body.username, body.password)
    if user is None:
        logger.info("Failed login for username %r", body.username)
        raise AuthenticationException("Invalid username or password")
    return _auth_response(user)


@router.get("/user", response_model=UserResponse)
async def read_current_user(current_user: CurrentUser) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.model_validate(current_user)
