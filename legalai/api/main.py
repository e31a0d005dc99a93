"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, legalai.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from legalai.api.deps.dependencies import get_service_cache
from legalai.boundary.db.create_tables import create_all_tables
from legalai.configs import get_settings
from legalai.observability.logger import configure_logging, get_logger
from legalai.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    documents_router,
    editor_router,
    health_router,
    redline_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup configures logging and creates missing tables when enabled.
    Shutdown waits for in-flight redline runs before clearing cached services.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = get_logger(__name__)

    # Startup
    if settings.database.auto_create_tables:
        await create_all_tables()

    cache = get_service_cache()
    if not cache.gateway.is_configured:
        logger.warning(
            "Azure OpenAI configuration is incomplete. "
            "Set AZURE_OPENAI_ENDPOINT and AZURE_OPENAI_API_KEY."
        )
    logger.info("Application started", extra={"environment": settings.environment})

    yield

    # Shutdown
    await cache.shutdown()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    settings = get_settings()
    app = FastAPI(
        title="LegalAI Redline API",
        description="Automated contract review with two-stage model analysis",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(redline_router, prefix="/api/v1")
    app.include_router(editor_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "legalai.api.main:app",
        host=get_settings().api_host,
        port=get_settings().api_port,
    )
