"""WebSocket endpoint (/ws) and its status route.

Both use the connection registry from app.state (created in the app factory).
Connections start anonymous; the client binds a user with an ``auth`` message.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from taskboard.api.v1.dependencies import get_ws_registry, get_ws_registry_for_socket
from taskboard.api.websocket.handler import handle_client_message
from taskboard.api.websocket.registry import ConnectionRegistry
from taskboard.core.config import get_settings
from taskboard.schemas.websocket import WebSocketStatusResponse

logger = logging.getLogger(__name__)

router = APIRouter()
status_router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    registry: Annotated[ConnectionRegistry, Depends(get_ws_registry_for_socket)],
) -> None:
    """Accept, greet, then apply client frames until the socket closes."""
    require_token = get_settings().ws_require_token
    await websocket.accept()
    await registry.register(websocket)
    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(message.get("code", 1000))
            # Binary frames carry the same JSON as text frames.
            raw = message.get("text")
            if raw is None:
                raw = message.get("bytes") or b""
            await handle_client_message(
                registry, websocket, raw, require_token=require_token
            )
    except WebSocketDisconnect:
        logger.debug("WebSocket client disconnected")
    finally:
        await registry.unregister(websocket)


@status_router.get("/status", response_model=WebSocketStatusResponse)
async def websocket_status(
    registry: Annotated[ConnectionRegistry, Depends(get_ws_registry)],
) -> WebSocketStatusResponse:
    """Open and authenticated connection counts."""
    return WebSocketStatusResponse(
        total_connections=await registry.get_connection_count(),
        authenticated_connections=await registry.get_authenticated_count(),
    )
