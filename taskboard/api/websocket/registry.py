"""Live connection registry.

Tracks every open WebSocket and the user identity it announced, if any.
Use via app.state.ws_registry (set in the app factory). A connection is
anonymous until the client sends an ``auth`` message; anonymous connections
only ever receive broadcasts.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Protocol

from starlette.websockets import WebSocketState

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = "Connected to Task Management System WebSocket Server"
AUTH_SUCCESS_MESSAGE = "Authentication successful"


class Transport(Protocol):
    """The part of a Starlette WebSocket the registry relies on."""

    client_state: WebSocketState
    application_state: WebSocketState

    async def send_json(self, data: Any, mode: str = "text") -> None: ...


@dataclass
class Connection:
    """One registered transport and the user bound to it (None while anonymous)."""

    transport: Transport
    user_id: int | None = None

    def is_ready(self) -> bool:
        """True when both sides of the socket are still open for writing."""
        return (
            self.transport.client_state == WebSocketState.CONNECTED
            and self.transport.application_state == WebSocketState.CONNECTED
        )

    async def send(self, message: dict[str, Any]) -> bool:
        """Write one JSON frame. Returns False (and logs) if the transport refused it."""
        try:
            await self.transport.send_json(message)
        except Exception:
            # Dead sockets are removed by the disconnect path, not here.
            logger.warning(
                "WebSocket send failed (user_id=%s)", self.user_id, exc_info=True
            )
            return False
        return True


class ConnectionRegistry:
    """Open connections keyed by transport, with lookup by bound user id.

    - register() adds an anonymous entry and greets the client.
    - authenticate() binds (or rebinds) a user id and acknowledges.
    - unregister() is safe for transports that were never registered.
    """

    def __init__(self) -> None:
        self._connections: dict[int, Connection] = {}
        self._lock = asyncio.Lock()

    async def register(self, transport: Transport) -> Connection:
        """Track an already-accepted transport and send the welcome message."""
        connection = Connection(transport=transport)
        async with self._lock:
            self._connections[id(transport)] = connection
        logger.debug("WebSocket registered (%d open)", len(self._connections))
        await connection.send({"type": "welcome", "message": WELCOME_MESSAGE})
        return connection

    async def authenticate(self, transport: Transport, user_id: int) -> Connection | None:
        """Bind user_id to the transport's connection, overwriting any earlier identity.

        Returns None when the transport is not registered.
        """
        async with self._lock:
            connection = self._connections.get(id(transport))
            if connection is None:
                return None
            connection.user_id = user_id
        logger.info("WebSocket authenticated for user %s", user_id)
        await connection.send({"type": "auth_success", "message": AUTH_SUCCESS_MESSAGE})
        return connection

    async def unregister(self, transport: Transport) -> None:
        """Forget the transport. No-op if it was never registered."""
        async with self._lock:
            connection = self._connections.pop(id(transport), None)
        if connection is not None:
            logger.debug(
                "WebSocket unregistered (user_id=%s, %d open)",
                connection.user_id,
                len(self._connections),
            )

    async def connections(self) -> list[Connection]:
        """Snapshot of every registered connection."""
        async with self._lock:
            return list(self._connections.values())

    async def connections_for_user(self, user_id: int) -> list[Connection]:
        """Snapshot of the connections bound to user_id (zero, one or many)."""
        async with self._lock:
            return [c for c in self._connections.values() if c.user_id == user_id]

    async def get_connection_count(self) -> int:
        async with self._lock:
            return len(self._connections)

    async def get_authenticated_count(self) -> int:
        async with self._lock:
            return sum(1 for c in self._connections.values() if c.user_id is not None)
