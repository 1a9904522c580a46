"""Stockroom API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery — ExMA anti-pattern)
    - Global error handlers map CatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database, bridge, notifier and orchestrator built once in the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Initial full fetch at startup (fetch_on_startup): the mirror is populated
      before the first request, like a UI loading its list on mount
    - A failed startup fetch does not abort startup: it is reported like any
      other fetch failure and can be retried via POST /items/refresh
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom.api.error_handlers import register_error_handlers
from stockroom.api.routes import (
    health, catalog_items, catalog_selection, notifications,
)
from stockroom.config import Settings, get_settings
from stockroom.infrastructure.database import init_db
from stockroom.infrastructure.observability import setup_logging
from stockroom.infrastructure.sql_command_bridge import SqlCommandBridge
from stockroom.services.catalog_orchestrator import CatalogOrchestrator
from stockroom.services.notification_log import NotificationLog

logger = logging.getLogger(__name__)


def build_orchestrator(
    settings: Settings, bridge: SqlCommandBridge, notifications: NotificationLog,
) -> CatalogOrchestrator:
    return CatalogOrchestrator(
        bridge,
        notifications,
        collection=settings.catalog_collection,
        refetch_after_mutation=settings.refetch_after_mutation,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_auto_create:
        await manager.create_schema()

    notification_log = NotificationLog(settings.notification_history_size)
    orchestrator = build_orchestrator(
        settings, SqlCommandBridge(manager), notification_log,
    )
    app.state.notifications = notification_log
    app.state.orchestrator = orchestrator

    if settings.fetch_on_startup:
        result = await orchestrator.fetch_items()
        logger.info(f"Startup fetch: {result.status.value} ({result.message})")

    logger.info("Stockroom API started")
    yield
    logger.info("Stockroom API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Stockroom API", version="1.0.0", lifespan=lifespan,
)

# CORS from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration (ExMA: no convention-over-config)
app.include_router(health.router)
app.include_router(catalog_items.router)
app.include_router(catalog_selection.router)
app.include_router(notifications.router)

register_error_handlers(app)
