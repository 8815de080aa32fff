"""FastAPI application factory."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from landscape360.api.middleware import (
    AuthenticationMiddleware,
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    TenantResolutionMiddleware,
)
from landscape360.api.routers import health_router, v1_router
from landscape360.config.settings import Settings, get_settings
from landscape360.config.validation import get_configuration_summary, validate_or_raise
from landscape360.core.logging import get_logger, setup_logging
from landscape360.db.config import close_db, configure_engine, get_async_session, init_db
from landscape360.tenancy.directory import SQLAlchemyTenantDirectory, TenantDirectory
from landscape360.tenancy.resolver import (
    TENANT_DOMAIN_HEADER,
    TENANT_SUBDOMAIN_HEADER,
    TenantResolver,
)

logger = get_logger("landscape360.api")


def create_app(
    settings: Settings | None = None,
    tenant_directory: TenantDirectory | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional settings override (useful for testing)
        tenant_directory: Optional tenant store override (default: the database)

    Returns:
        Configured FastAPI application

    Example:
        # Production
        app = create_app()

        # Run with uvicorn
        uvicorn landscape360.api.app:create_app --factory
    """
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title="Landscape360 API",
        description="Multi-tenant landscaping business platform API",
        version="0.1.0",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=_lifespan,
    )

    # Store settings and the resolver on app state for middleware and dependencies
    app.state.settings = settings
    app.state.tenant_resolver = TenantResolver(
        tenant_directory
        if tenant_directory is not None
        else SQLAlchemyTenantDirectory(get_async_session),
        settings,
    )

    _configure_middleware(app, settings)
    _configure_routers(app, settings)

    return app


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Configures logging, validates settings and opens the database pool on
    startup; disposes of the pool on shutdown.
    """
    settings: Settings = app.state.settings

    setup_logging(settings)
    validate_or_raise(settings)
    logger.info("application_starting", **get_configuration_summary(settings))

    configure_engine(settings)
    try:
        await init_db()
        logger.info("database_initialized")
    except Exception as e:
        logger.warning("database_initialization_failed", error=str(e)[:200])

    yield

    logger.info("application_stopping")
    await close_db()


def _configure_middleware(app: FastAPI, settings: Settings) -> None:
    """Configure middleware stack.

    Middleware order (outermost to innermost execution):
    1. RequestLoggingMiddleware - Assigns request IDs and logs all requests
    2. ErrorHandlingMiddleware - Converts exceptions to HTTP responses
    3. CORSMiddleware - Handles CORS (if configured)
    4. AuthenticationMiddleware - Validates optional Bearer token
    5. TenantResolutionMiddleware - Resolves the tenant and sets its context

    Note: Middleware is added in reverse order because Starlette
    processes them from last-added to first-added.
    """
    # Innermost: tenant context wraps only the route handler
    app.add_middleware(TenantResolutionMiddleware)

    app.add_middleware(AuthenticationMiddleware)

    if settings.CORS_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ORIGINS,
            allow_credentials=True,
            allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
            allow_headers=[
                "Authorization",
                "Content-Type",
                TENANT_SUBDOMAIN_HEADER,
                TENANT_DOMAIN_HEADER,
            ],
        )

    # Error handling (catches exceptions from all inner middleware)
    app.add_middleware(ErrorHandlingMiddleware)

    # Outermost: request logging
    app.add_middleware(RequestLoggingMiddleware)


def _configure_routers(app: FastAPI, settings: Settings) -> None:
    """Configure API routers.

    Health checks are mounted at the root; everything else lives under
    the configured API prefix.
    """
    app.include_router(health_router)
    app.include_router(v1_router, prefix=settings.API_PREFIX)
