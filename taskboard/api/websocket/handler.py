"""Handles inbound client frames for one registered connection."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from taskboard.api.websocket.messages import AuthMessage, PingMessage, parse_client_message
from taskboard.api.websocket.registry import ConnectionRegistry, Transport
from taskboard.infrastructure.security.jwt import user_id_from_token

logger = logging.getLogger(__name__)


async def handle_client_message(
    registry: ConnectionRegistry,
    transport: Transport,
    raw: str | bytes,
    *,
    require_token: bool = False,
) -> None:
    """Apply one client frame. Malformed frames are logged and dropped."""
    try:
        message = parse_client_message(raw)
    except ValidationError as e:
        logger.warning("Dropping malformed WebSocket message: %s", e.errors(include_url=False))
        return

    match message:
        case AuthMessage():
            await _authenticate(registry, transport, message, require_token=require_token)
        case PingMessage():
            await transport.send_json({"type": "pong"})


async def _authenticate(
    registry: ConnectionRegistry,
    transport: Transport,
    message: AuthMessage,
    *,
    require_token: bool,
) -> None:
    if require_token:
        error = _token_error(message)
        if error:
            logger.info("WebSocket auth rejected for user %s: %s", message.user_id, error)
            await transport.send_json({"type": "auth_error", "message": error})
            return
    await registry.authenticate(transport, message.user_id)


def _token_error(message: AuthMessage) -> str | None:
    if not message.token:
        return "Token required"
    try:
        token_user_id = user_id_from_token(message.token)
    except ValueError:
        return "Invalid token"
    if token_user_id != message.user_id:
        return "Token does not match user"
    return None
