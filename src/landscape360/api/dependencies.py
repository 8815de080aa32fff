"""FastAPI dependencies for API endpoints."""

from typing import Annotated

from fastapi import Depends, Request

from landscape360.config.settings import Settings, get_settings
from landscape360.core.context import TenantContext, get_current_context
from landscape360.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    TenantRequiredError,
)
from landscape360.db.config import get_db
from landscape360.db.schemas.tenant import TenantSnapshot
from landscape360.tenancy.access import Principal, UserRole, validate_tenant_access

# Re-export database dependencies for convenience
__all__ = [
    "get_current_principal",
    "get_current_tenant",
    "get_db",
    "get_optional_principal",
    "get_request_id",
    "get_request_settings",
    "get_tenant_context",
    "require_super_admin",
    "require_tenant_access",
]


def get_request_settings(request: Request) -> Settings:
    """Settings the application was created with."""
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_tenant_context() -> TenantContext:
    """Get the tenant context published by TenantResolutionMiddleware.

    Returns:
        The current TenantContext (possibly empty)

    Raises:
        ContextNotSetError: If the middleware is not installed
    """
    return get_current_context()


async def get_current_tenant(
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
) -> TenantSnapshot:
    """Get the resolved tenant, failing when the request has none.

    Raises:
        TenantRequiredError: If the request resolved to the platform
    """
    if ctx.tenant is None:
        raise TenantRequiredError()
    return ctx.tenant


def get_optional_principal(request: Request) -> Principal | None:
    """Get the authenticated principal, or None for anonymous requests."""
    return getattr(request.state, "principal", None)


def get_current_principal(
    principal: Annotated[Principal | None, Depends(get_optional_principal)],
) -> Principal:
    """Get the authenticated principal.

    Raises:
        AuthenticationError: If the request carried no valid token
    """
    if principal is None:
        raise AuthenticationError("Authentication required")
    return principal


async def require_tenant_access(
    principal: Annotated[Principal, Depends(get_current_principal)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
) -> Principal:
    """Ensure the principal may act on the request's tenant.

    Raises:
        TenantAccessDeniedError: If the principal belongs to another tenant
    """
    validate_tenant_access(principal, ctx)
    return principal


def require_super_admin(
    principal: Annotated[Principal, Depends(get_current_principal)],
) -> Principal:
    """Ensure the principal is a platform super admin.

    Raises:
        AuthorizationError: For any other role
    """
    if not principal.is_super_admin:
        raise AuthorizationError(principal.role.value, UserRole.SUPER_ADMIN.value)
    return principal


def get_request_id(request: Request) -> str:
    """Get the request ID set by RequestLoggingMiddleware."""
    return str(getattr(request.state, "request_id", "unknown"))
