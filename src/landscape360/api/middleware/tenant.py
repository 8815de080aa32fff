"""Tenant resolution middleware."""

from collections.abc import Callable
from datetime import UTC, datetime

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from landscape360.api.schemas.errors import APIError, ErrorCode
from landscape360.config.settings import Settings, get_settings
from landscape360.core.context import TenantContext, tenant_context
from landscape360.core.exceptions import (
    TenantDirectoryUnavailableError,
    TenantInactiveError,
    TenantNotFoundError,
)
from landscape360.tenancy.resolver import TenantRequest, TenantResolver

# Paths served without tenant resolution
SKIP_RESOLUTION_PATHS = {
    "/health",
    "/health/directory",
    "/docs",
    "/redoc",
    "/openapi.json",
}


class TenantResolutionMiddleware(BaseHTTPMiddleware):
    """Middleware that resolves the request's tenant and publishes it.

    Runs the rest of the request inside ``tenant_context()`` so handlers,
    services and log processors can read the tenant without it being
    passed around. Resolution failures end the request here, before any
    route handler runs.

    Requires:
        request.app.state.tenant_resolver: TenantResolver (unless passed in)

    Sets:
        request.state.tenant_context: The resolved TenantContext
        request.state.tenant_id: Tenant UUID, or None
    """

    def __init__(self, app: ASGIApp, resolver: TenantResolver | None = None):
        super().__init__(app)
        self._resolver = resolver

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request within the resolved tenant context."""
        try:
            ctx = await self._resolve(request)
        except TenantNotFoundError as e:
            return self._not_found(request, e)
        except TenantInactiveError as e:
            return self._forbidden(request, e)
        except TenantDirectoryUnavailableError as e:
            return self._unavailable(request, e)

        request.state.tenant_context = ctx
        request.state.tenant_id = ctx.tenant_id

        with tenant_context(ctx):
            return await call_next(request)

    async def _resolve(self, request: Request) -> TenantContext:
        if request.url.path in SKIP_RESOLUTION_PATHS:
            return TenantContext.empty()
        resolver = self._get_resolver(request)
        return await resolver.resolve(TenantRequest.from_request(request))

    def _get_resolver(self, request: Request) -> TenantResolver:
        if self._resolver is not None:
            return self._resolver
        return request.app.state.tenant_resolver

    def _settings(self, request: Request) -> Settings:
        return getattr(request.app.state, "settings", None) or get_settings()

    def _not_found(self, request: Request, exc: TenantNotFoundError) -> JSONResponse:
        """Create a 404 response. The key is only echoed in debug mode."""
        if self._settings(request).DEBUG:
            message = f"Tenant not found for domain: {exc.tenant_key}"
            details = {"tenant_key": str(exc.tenant_key)}
        else:
            message = "Tenant not found"
            details = None
        return self._error(request, 404, ErrorCode.TENANT_NOT_FOUND, message, details)

    def _forbidden(self, request: Request, exc: TenantInactiveError) -> JSONResponse:
        """Create a 403 response for an inactive tenant."""
        return self._error(
            request, 403, ErrorCode.TENANT_INACTIVE, "Tenant account is inactive", None
        )

    def _unavailable(
        self, request: Request, exc: TenantDirectoryUnavailableError
    ) -> JSONResponse:
        """Create a 503 response for directory outages."""
        details = {"attempts": exc.attempts} if self._settings(request).DEBUG else None
        response = self._error(
            request,
            503,
            ErrorCode.SERVICE_UNAVAILABLE,
            "Tenant lookup is temporarily unavailable",
            details,
        )
        response.headers["Retry-After"] = "1"
        return response

    def _error(
        self,
        request: Request,
        status_code: int,
        error_code: ErrorCode,
        message: str,
        details: dict | None,
    ) -> JSONResponse:
        request_id = str(getattr(request.state, "request_id", "unknown"))
        error = APIError(
            error_code=error_code.value,
            message=message,
            details=details,
            request_id=request_id,
            timestamp=datetime.now(UTC),
        )
        return JSONResponse(
            status_code=status_code,
            content=error.model_dump(mode="json"),
        )
