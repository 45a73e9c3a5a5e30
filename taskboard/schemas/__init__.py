"""Pydantic request/response schemas for the API."""

from taskboard.schemas.auth import AuthResponse, CredentialsRequest
from taskboard.schemas.common import CamelModel, MessageResponse, SuccessResponse
from taskboard.schemas.health import HealthResponse
from taskboard.schemas.notification import (
    LiveNotificationPayload,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from taskboard.schemas.stats import TaskStatsResponse, TeamMemberStatsResponse
from taskboard.schemas.task import (
    TaskAssigneeUpdateRequest,
    TaskCreateRequest,
    TaskListResponse,
    TaskResponse,
    TaskStatusUpdateRequest,
    TaskUpdateRequest,
)
from taskboard.schemas.user import UserResponse
from taskboard.schemas.websocket import TaskUpdatePayload, WebSocketStatusResponse

__all__ = [
    "AuthResponse",
    "CamelModel",
    "CredentialsRequest",
    "HealthResponse",
    "LiveNotificationPayload",
    "MessageResponse",
    "NotificationListResponse",
    "NotificationResponse",
    "SuccessResponse",
    "TaskAssigneeUpdateRequest",
    "TaskCreateRequest",
    "TaskListResponse",
    "TaskResponse",
    "TaskStatsResponse",
    "TaskStatusUpdateRequest",
    "TaskUpdatePayload",
    "TaskUpdateRequest",
    "TeamMemberStatsResponse",
    "UnreadCountResponse",
    "WebSocketStatusResponse",
]
