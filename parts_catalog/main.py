"""
Parts Catalog API - FastAPI application factory
"""
from contextlib import asynccontextmanager
from typing import Any, Dict

import sentry_sdk
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from starlette_context import plugins
from starlette_context.middleware import ContextMiddleware

from parts_catalog.api.v1 import api_router
from parts_catalog.core.config import settings
from parts_catalog.core.database import db_manager
from parts_catalog.core.exceptions import BaseAPIException, handle_api_exception, handle_unexpected_exception
from parts_catalog.core.logging import log, setup_logging
from parts_catalog.middleware import SecurityHeadersMiddleware, TimingMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan events
    """
    setup_logging()
    log.info("Starting Parts Catalog API", version=settings.version, env=settings.environment)

    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,
        )
        log.info("Sentry initialized")

    await db_manager.init()

    yield

    log.info("Shutting down Parts Catalog API")
    await db_manager.close()


def create_application() -> FastAPI:
    """
    Create FastAPI application with all configurations
    """
    docs_enabled = not settings.is_production

    app = FastAPI(
        title=settings.app_name,
        version=settings.version,
        openapi_url=f"{settings.api_prefix}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.api_prefix}/docs" if docs_enabled else None,
        redoc_url=None,
        default_response_class=ORJSONResponse,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Health check endpoints"},
            {"name": "manufacturers", "description": "Manufacturer catalog management"},
        ],
    )

    # Custom exception handlers
    app.add_exception_handler(BaseAPIException, handle_api_exception)
    app.add_exception_handler(Exception, handle_unexpected_exception)

    # Middleware stack, innermost first
    app.add_middleware(TimingMiddleware)
    app.add_middleware(
        ContextMiddleware,
        plugins=(
            plugins.RequestIdPlugin(validate=False),
        ),
    )
    app.add_middleware(SecurityHeadersMiddleware, api_prefix=settings.api_prefix)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[str(origin) for origin in settings.cors_origins],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "X-Process-Time"],
        )

    app.include_router(api_router, prefix=settings.api_prefix)

    @app.get("/", tags=["root"])
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information"""
        return {
            "name": settings.app_name,
            "version": settings.version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs" if docs_enabled else None,
        }

    return app


# Create the application instance
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "parts_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        workers=settings.workers if not settings.debug else 1,
        log_config=None,
        server_header=False,
    )
