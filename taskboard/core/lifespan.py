"""Application lifespan: startup and shutdown.

Only infrastructure wiring here: logging, table creation and engine disposal.
The WebSocket registry is created by the app factory, not here, so that
in-process test transports that skip lifespan still find it on app.state.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from taskboard.core.config import get_settings
from taskboard.infrastructure.persistence.database import dispose_engine, init_models
from taskboard.shared.telemetry import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, then tables (when database_auto_create is on).
    Shutdown: SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()
    logger.info("Starting %s %s", settings.app_name, settings.app_version)

    if settings.database_auto_create:
        await init_models()

    yield

    await dispose_engine()
    logger.info("Database engine disposed")
