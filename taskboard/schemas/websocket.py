"""WebSocket API schemas."""

from pydantic import Field

from taskboard.domain.enums import TaskAction
from taskboard.schemas.common import CamelModel
from taskboard.schemas.task import TaskResponse


class WebSocketStatusResponse(CamelModel):
    """Response for GET /ws/status (connection counts)."""

    total_connections: int = Field(..., description="Number of open WebSocket connections")
    authenticated_connections: int = Field(
        ..., description="Connections bound to a user by an auth message"
    )


class TaskUpdatePayload(CamelModel):
    """``data`` of a broadcast ``task_update`` WebSocket envelope."""

    action: TaskAction
    task: TaskResponse
