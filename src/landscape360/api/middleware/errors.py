"""Error handling middleware for mapping exceptions to HTTP responses."""

from collections.abc import Callable
from datetime import UTC, datetime

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from landscape360.api.schemas.errors import APIError, ErrorCode
from landscape360.config.settings import get_settings
from landscape360.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ContextNotSetError,
    TenantAccessDeniedError,
    TenantDirectoryUnavailableError,
    TenantInactiveError,
    TenantNotFoundError,
    TenantRequiredError,
)
from landscape360.core.logging import get_logger, log_exception

logger = get_logger("landscape360.api.errors")


# Exception to HTTP status/error code mapping
# Format: Exception -> (status_code, error_code)
EXCEPTION_MAP: dict[type[Exception], tuple[int, str]] = {
    AuthenticationError: (401, ErrorCode.UNAUTHORIZED.value),
    AuthorizationError: (403, ErrorCode.FORBIDDEN.value),
    TenantNotFoundError: (404, ErrorCode.TENANT_NOT_FOUND.value),
    TenantInactiveError: (403, ErrorCode.TENANT_INACTIVE.value),
    TenantAccessDeniedError: (403, ErrorCode.TENANT_ACCESS_DENIED.value),
    TenantRequiredError: (400, ErrorCode.TENANT_REQUIRED.value),
    TenantDirectoryUnavailableError: (503, ErrorCode.SERVICE_UNAVAILABLE.value),
    ContextNotSetError: (500, ErrorCode.INTERNAL_ERROR.value),
    ValidationError: (422, ErrorCode.VALIDATION_ERROR.value),
}


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware that catches exceptions and returns standardized error responses.

    Maps domain exceptions to appropriate HTTP status codes and formats
    all errors using the APIError schema.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and handle any exceptions."""
        try:
            return await call_next(request)
        except Exception as exc:
            return self._handle_exception(request, exc)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """Convert exception to JSON error response."""
        request_id = str(getattr(request.state, "request_id", "unknown"))
        debug = self._is_debug(request)
        status_code, error_code, message, details = self._map_exception(exc, debug)

        if status_code >= 500:
            log_exception(logger, exc, path=request.url.path, request_id=request_id)

        error = APIError(
            error_code=error_code,
            message=message,
            details=details,
            request_id=request_id,
            timestamp=datetime.now(UTC),
        )

        return JSONResponse(
            status_code=status_code,
            content=error.model_dump(mode="json"),
            headers={"X-Request-ID": request_id},
        )

    def _map_exception(
        self, exc: Exception, debug: bool = False
    ) -> tuple[int, str, str, dict | None]:
        """Map exception to (status_code, error_code, message, details)."""
        for exc_type in type(exc).__mro__:
            if exc_type in EXCEPTION_MAP:
                status_code, error_code = EXCEPTION_MAP[exc_type]
                break
        else:
            return (
                500,
                ErrorCode.INTERNAL_ERROR.value,
                "Internal server error",
                {"type": type(exc).__name__} if debug else None,
            )

        message, details = self._describe(exc, debug)
        return status_code, error_code, message, details

    def _describe(self, exc: Exception, debug: bool) -> tuple[str, dict | None]:
        """Public message and details for a mapped exception."""
        if isinstance(exc, AuthenticationError):
            return exc.reason, None

        if isinstance(exc, AuthorizationError):
            return "Insufficient permissions", None

        # Tenant errors
        if isinstance(exc, TenantNotFoundError):
            if debug:
                return (
                    f"Tenant not found for domain: {exc.tenant_key}",
                    {"tenant_key": str(exc.tenant_key)},
                )
            return "Tenant not found", None

        if isinstance(exc, TenantInactiveError):
            return "Tenant account is inactive", None

        if isinstance(exc, TenantAccessDeniedError):
            return "Access denied: user does not belong to this tenant", None

        if isinstance(exc, TenantRequiredError):
            return exc.args[0], None

        if isinstance(exc, TenantDirectoryUnavailableError):
            return (
                "Tenant lookup is temporarily unavailable",
                {"attempts": exc.attempts} if debug else None,
            )

        # Validation errors (Pydantic)
        if isinstance(exc, ValidationError):
            return "Request validation failed", {"errors": exc.errors(include_url=False)}

        # ContextNotSetError is the only remaining mapped type
        return "Internal server error: tenant context not initialized", None

    def _is_debug(self, request: Request) -> bool:
        settings = getattr(request.app.state, "settings", None) or get_settings()
        return settings.DEBUG
