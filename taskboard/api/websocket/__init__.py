"""Real-time channel: connection registry, fan-out dispatcher and message handling."""

from taskboard.api.websocket.dispatcher import FanOutDispatcher
from taskboard.api.websocket.publisher import TaskEventPublisher
from taskboard.api.websocket.registry import Connection, ConnectionRegistry

__all__ = ["Connection", "ConnectionRegistry", "FanOutDispatcher", "TaskEventPublisher"]
