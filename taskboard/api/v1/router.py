"""API router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from taskboard.api.v1.dependencies.
"""

from fastapi import APIRouter

from taskboard.api.v1.endpoints import (
    auth,
    health,
    notifications,
    tasks,
    team,
    users,
    websocket as ws_endpoint,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(
    notifications.router, prefix="/notifications", tags=["notifications"]
)
api_router.include_router(team.router, prefix="/team", tags=["team"])
api_router.include_router(ws_endpoint.status_router, prefix="/ws", tags=["websocket"])

# Mounted at the application root, outside the /api prefix.
ws_router = ws_endpoint.router
