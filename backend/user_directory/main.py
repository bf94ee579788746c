"""User Directory API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers turn every failure into a JSON envelope
    - The storage handle is built in the lifespan, stored on app.state and
      disposed on shutdown (SIGINT/SIGTERM via uvicorn)

Design Decisions:
    - create_app() factory: tests build isolated apps with their own Settings
    - Lifespan over @app.on_event: one place for startup and cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from user_directory.api.error_handlers import register_error_handlers
from user_directory.api.middleware import register_middleware
from user_directory.api.routes import health, users
from user_directory.config import Settings, get_settings
from user_directory.infrastructure.database import DatabaseSessionManager
from user_directory.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.auto_create_schema:
        await db_manager.create_schema()
    app.state.db_manager = db_manager
    logger.info(
        "User Directory API started",
        extra={"port": settings.port},
    )
    try:
        yield
    finally:
        logger.info("User Directory API shutting down")
        app.state.db_manager = None
        await db_manager.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="User Directory API", version="1.0.0", lifespan=lifespan,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
    )
    app.state.settings = settings
    app.state.db_manager = None

    register_middleware(app, settings)
    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(users.router)
    return app


app = create_app()
