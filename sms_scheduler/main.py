from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .bootstrap import Container, build_container
from .config import Settings, settings as default_settings
from .infrastructure.logging import configure_logging
from .presentation.api.errors import register_exception_handlers
from .presentation.api.v1 import delivery_status, health, messages
from .presentation.middleware import CorrelationIdMiddleware

logger = structlog.get_logger()


def create_app(settings: Settings | None = None, container: Container | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration; defaults to the environment-loaded settings
        container: Pre-built dependencies; built from ``settings`` when omitted
    """
    settings = settings or (container.settings if container else default_settings)
    container = container or build_container(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        logger.info("Starting application", service=settings.service_name)

        try:
            await container.database.create_tables()
        except Exception as e:
            logger.error(
                "Failed to create database tables",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            raise

        if settings.scheduler_enabled:
            container.poll_scheduler.start()

        yield

        await container.close()
        logger.info("Application shutdown complete")

    app = FastAPI(
        title="SMS Scheduler API",
        description="Schedule SMS messages for future delivery",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = container

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Origin", "Content-Type", "Accept", "Authorization"],
        expose_headers=["Content-Length", "X-Request-ID"],
        allow_credentials=True,
        max_age=12 * 60 * 60,
    )
    app.add_middleware(CorrelationIdMiddleware)  # Request tracing (runs first)

    app.include_router(health.router)
    app.include_router(messages.router, prefix="/api/v1")
    app.include_router(delivery_status.router, prefix="/api/v1")

    @app.get("/")
    def root() -> dict:
        return {
            "service": settings.service_name,
            "version": __version__,
            "docs": "/docs",
        }

    return app


configure_logging(default_settings.service_name)

app = create_app()
