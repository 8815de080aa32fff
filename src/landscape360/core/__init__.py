"""Core services and utilities for Landscape360."""

from .context import (
    TenantContext,
    get_current_context,
    get_current_context_or_none,
    get_current_tenant_id,
    require_tenant,
    reset_context,
    run_in_tenant_context,
    set_context,
    tenant_context,
)
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    ContextNotSetError,
    TenantAccessDeniedError,
    TenantDirectoryUnavailableError,
    TenantInactiveError,
    TenantNotFoundError,
    TenantRequiredError,
)

__all__ = [
    # Context
    "TenantContext",
    "get_current_context",
    "get_current_context_or_none",
    "get_current_tenant_id",
    "require_tenant",
    "reset_context",
    "run_in_tenant_context",
    "set_context",
    "tenant_context",
    # Exceptions
    "AuthenticationError",
    "AuthorizationError",
    "ContextNotSetError",
    "TenantAccessDeniedError",
    "TenantDirectoryUnavailableError",
    "TenantInactiveError",
    "TenantNotFoundError",
    "TenantRequiredError",
]
