"""HTTP API."""

from taskboard.api.v1.router import api_router, ws_router

__all__ = ["api_router", "ws_router"]
