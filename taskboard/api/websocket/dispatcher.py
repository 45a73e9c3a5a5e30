"""Fan-out dispatcher: targeted and broadcast pushes over registered connections.

Both primitives are fire-and-forget. Connections that are not open for
writing are skipped; failed sends are logged and never retried.
"""

from __future__ import annotations

import logging
from typing import Any

from taskboard.api.websocket.registry import Connection, ConnectionRegistry

logger = logging.getLogger(__name__)


class FanOutDispatcher:
    """Routes envelopes to connections held by a ConnectionRegistry."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self.registry = registry

    async def notify_user(self, user_id: int | None, payload: dict[str, Any]) -> int:
        """Send ``{type: "notification", data: payload}`` to every connection of user_id.

        Returns the number of connections written to.
        """
        if not user_id:
            return 0
        connections = await self.registry.connections_for_user(user_id)
        return await self._send_to_list(connections, {"type": "notification", "data": payload})

    async def broadcast(self, payload: dict[str, Any]) -> int:
        """Send ``{type: "task_update", data: payload}`` to every open connection."""
        connections = await self.registry.connections()
        return await self._send_to_list(connections, {"type": "task_update", "data": payload})

    async def _send_to_list(
        self,
        connections: list[Connection],
        message: dict[str, Any],
    ) -> int:
        delivered = 0
        for connection in connections:
            if not connection.is_ready():
                continue
            if await connection.send(message):
                delivered += 1
        logger.debug("Dispatched %s to %d connection(s)", message["type"], delivered)
        return delivered
