"""FastAPI application factory.

The FastAPI app is only the ASGI host: request IDs, backstop exception
handlers and lifespan. All routing goes through the gateway router, which
is attached as a single catch-all route.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI

from lightlog import __version__
from lightlog.api import build_router, build_services
from lightlog.config import Settings, get_settings
from lightlog.core.database import Database
from lightlog.core.errors import register_exception_handlers
from lightlog.core.logging import RequestIdMiddleware, configure_logging
from lightlog.modules.logs.sinks import EventSink


logger = structlog.get_logger()

GATEWAY_METHODS = ["GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS"]


def create_app(
    settings: Settings | None = None,
    database: Database | None = None,
    sink: EventSink | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (defaults to the environment)
        database: Database handle (defaults to one built from settings)
        sink: Destination for accepted events (defaults to logging them)

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, json_output=settings.is_production)

    db = database or Database.from_settings(settings)
    services = build_services(settings, db, sink)
    router = build_router(services)

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info(
            "application_startup",
            app_name=settings.app_name,
            environment=settings.environment,
            routes=len(router.routes),
        )
        yield
        logger.info("application_shutdown")
        await db.dispose()
        logger.info("database_disposed")

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant log ingestion gateway",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        # Disable docs in production
        docs_url="/docs" if not settings.is_production else None,
        redoc_url=None,
        openapi_url="/openapi.json" if not settings.is_production else None,
    )
    app.state.services = services
    app.state.router = router

    app.add_middleware(RequestIdMiddleware)
    register_exception_handlers(app)

    app.add_route(
        "/{path:path}",
        router.handle,
        methods=GATEWAY_METHODS,
        include_in_schema=False,
    )

    return app
