"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, flowshare.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flowshare import __version__
from flowshare.boundary.db.create_tables import create_all_tables
from flowshare.configs import get_settings
from flowshare.observability.logger import configure_logging
from flowshare.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware
from .routers import diagrams_router, health_router, users_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and, when enabled, creates missing tables.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = logging.getLogger(__name__)

    if settings.database.auto_create_tables:
        logger.info("Creating missing tables...")
        await create_all_tables()

    logger.info(
        "FlowShare API started",
        extra={"environment": settings.environment, "version": __version__},
    )
    yield
    logger.info("FlowShare API stopped")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="FlowShare API",
        description="Diagram storage, sharing and collaborative editing",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=get_settings().cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Added last so it runs first and request logs carry the correlation id
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(users_router, prefix="/api/v1")
    app.include_router(diagrams_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "flowshare.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
