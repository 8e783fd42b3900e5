"""Newsletter API — FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery) and checked to be disjoint
    - No docs/OpenAPI routes: the HTTP surface is exactly the registered routes
    - No trailing-slash redirects: /greet/ is a 404, not a 307
    - Global error handlers map every failure to an empty-bodied status response
    - Database pool created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Factory over module-level app: no import side effects; serve with
      `uvicorn --factory newsletter.main:create_app` or `newsletter` (startup.py)
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.routing import APIRoute

from newsletter.api.dispatch import ensure_disjoint
from newsletter.api.error_handlers import register_error_handlers
from newsletter.api.routes import greet, health, subscriptions
from newsletter.config import Settings, get_settings
from newsletter.core.errors import DatabaseError
from newsletter.infrastructure.database import DatabaseSessionManager
from newsletter.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = (health.router, greet.router, subscriptions.router)


def route_table() -> list[APIRoute]:
    """Every registered route, taken from the routers themselves."""
    return [route for router in ROUTERS for route in router.routes]


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the ASGI application for the given settings."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(
            settings.application_name, settings.log_level, settings.log_format,
        )
        db = DatabaseSessionManager.from_settings(settings.database)
        if settings.database.connect_on_startup and not await db.health_check():
            await db.dispose()
            raise DatabaseError("database unreachable at startup", "connect")
        app.state.db = db
        logger.info(
            "Newsletter API started",
            extra={"environment": settings.environment.value},
        )
        try:
            yield
        finally:
            await db.dispose()
            logger.info("Newsletter API shutting down")

    app = FastAPI(
        title="Newsletter API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
        redirect_slashes=False,
    )
    app.state.settings = settings

    for router in ROUTERS:
        app.include_router(router)
    app.state.route_table = route_table()
    ensure_disjoint(app.state.route_table)

    register_error_handlers(app)
    return app
