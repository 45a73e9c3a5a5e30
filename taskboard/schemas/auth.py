"""Auth API schemas."""

from pydantic import Field

from taskboard.schemas.common import CamelModel
from taskboard.schemas.user import UserResponse


class CredentialsRequest(CamelModel):
    """Request body for register and login."""

    username: str = Field(..., min_length=3, max_length=64)
    password: str = Field(..., min_length=6, description="Password (min 6 characters)")


class AuthResponse(CamelModel):
    """Authenticated user plus a bearer token."""

    user: UserResponse
    access_token: str
    token_type: str = "bearer"
