"""Request-scoped tenant context.

This module makes the tenant resolved for a request available to any code
running later in the same request, without passing it through every call.
It uses Python's contextvars, so each asyncio task (and therefore each
request handled by the ASGI server) sees only its own value.

Usage:
    from landscape360.core.context import (
        TenantContext,
        get_current_context,
        tenant_context,
    )

    ctx = TenantContext(tenant_id=tenant.tenant_id, tenant=tenant)

    # Use as context manager (sync or async)
    with tenant_context(ctx):
        current = get_current_context()
        await load_appointments(current.tenant_id)

    # Or wrap a continuation
    result = await run_in_tenant_context(ctx, handle_request, request)
"""

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, model_validator

from landscape360.core.exceptions import ContextNotSetError, TenantRequiredError
from landscape360.db.schemas.tenant import TenantSnapshot


class TenantContext(BaseModel):
    """Outcome of tenant resolution for a single request.

    Either carries a tenant (``tenant_id`` and ``tenant`` both set) or is
    empty, which means the request targets the platform itself (super-admin
    domains, admin routes, local development hosts).
    """

    model_config = ConfigDict(frozen=True)

    tenant_id: UUID | None = None
    tenant: TenantSnapshot | None = None

    @model_validator(mode="after")
    def validate_tenant_consistency(self) -> "TenantContext":
        """Validate that tenant_id and tenant agree."""
        if (self.tenant_id is None) != (self.tenant is None):
            raise ValueError("tenant_id and tenant must be set together")
        if self.tenant is not None and self.tenant.tenant_id != self.tenant_id:
            raise ValueError("tenant_id does not match tenant.tenant_id")
        return self

    @classmethod
    def empty(cls) -> "TenantContext":
        """Context for requests that are not scoped to a tenant."""
        return cls()

    @classmethod
    def for_tenant(cls, tenant: TenantSnapshot) -> "TenantContext":
        """Context for a resolved tenant."""
        return cls(tenant_id=tenant.tenant_id, tenant=tenant)

    @property
    def has_tenant(self) -> bool:
        return self.tenant_id is not None

    def to_log_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for log entries."""
        if self.tenant is None:
            return {"tenant_id": None, "tenant_subdomain": None}
        return {
            "tenant_id": str(self.tenant_id),
            "tenant_subdomain": self.tenant.subdomain,
        }


# =============================================================================
# Context Variable Management
# =============================================================================

_tenant_context: ContextVar[TenantContext | None] = ContextVar("tenant_context", default=None)


def get_current_context() -> TenantContext:
    """Get the current tenant context.

    Returns:
        The current TenantContext (possibly empty)

    Raises:
        ContextNotSetError: If no context was established for this execution context
    """
    ctx = _tenant_context.get()
    if ctx is None:
        raise ContextNotSetError(
            "No tenant context is set. Use tenant_context() or the tenant resolution middleware."
        )
    return ctx


def get_current_context_or_none() -> TenantContext | None:
    """Get the current tenant context, or None outside any request.

    Returns:
        The current TenantContext, or None if not set
    """
    return _tenant_context.get()


def get_current_tenant_id() -> UUID | None:
    """Get the tenant id for the current request, if any."""
    ctx = _tenant_context.get()
    return ctx.tenant_id if ctx is not None else None


def require_tenant() -> TenantContext:
    """Get the current context, requiring that it carries a tenant.

    Raises:
        ContextNotSetError: If no context was established
        TenantRequiredError: If the request is not scoped to a tenant
    """
    ctx = get_current_context()
    if not ctx.has_tenant:
        raise TenantRequiredError()
    return ctx


def set_context(ctx: TenantContext) -> Token[TenantContext | None]:
    """Set the tenant context and return a token for restoration.

    This is a low-level API. Prefer using the tenant_context() context manager.
    """
    return _tenant_context.set(ctx)


def reset_context(token: Token[TenantContext | None]) -> None:
    """Reset the context to its previous value using a token from set_context()."""
    _tenant_context.reset(token)


@contextmanager
def tenant_context(ctx: TenantContext) -> Iterator[TenantContext]:
    """Context manager establishing ``ctx`` for the duration of the block.

    Works for both sync and async code. Tasks created inside the block
    (asyncio.create_task, TaskGroup, threadpool offloading) copy the
    context at creation time and keep seeing ``ctx``. The previous value
    is restored when the block exits, even on error.
    """
    token = set_context(ctx)
    try:
        yield ctx
    finally:
        reset_context(token)


async def run_in_tenant_context(
    ctx: TenantContext,
    continuation: Callable[..., Any],
    *args: Any,
    **kwargs: Any,
) -> Any:
    """Run ``continuation`` with ``ctx`` as the current tenant context.

    The continuation may be a plain function or a coroutine function; its
    result is awaited when needed and returned.
    """
    with tenant_context(ctx):
        result = continuation(*args, **kwargs)
        if inspect.isawaitable(result):
            result = await result
        return result
