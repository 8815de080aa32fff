"""Explicit tenant filters for tenant-owned tables.

Tenant-owned queries must always carry the tenant id as a filter. These
helpers make that filter mandatory instead of relying on implicit
query rewriting.
"""

from typing import Any, TypeVar
from uuid import UUID

from sqlalchemy import Select

from landscape360.core.context import require_tenant
from landscape360.core.exceptions import TenantRequiredError

S = TypeVar("S", bound=Select[Any])


def tenant_scoped(statement: S, model: Any, tenant_id: UUID | None) -> S:
    """Restrict ``statement`` to rows of ``model`` owned by ``tenant_id``.

    Args:
        statement: SELECT statement to filter
        model: Mapped class (or aliased entity) with a ``tenant_id`` column
        tenant_id: Tenant the rows must belong to

    Returns:
        The filtered statement

    Raises:
        TenantRequiredError: If tenant_id is None
        AttributeError: If the model has no tenant_id column
    """
    if tenant_id is None:
        raise TenantRequiredError("Tenant-scoped query issued without a tenant id")
    return statement.where(model.tenant_id == tenant_id)


def scoped_to_current_tenant(statement: S, model: Any) -> S:
    """Restrict ``statement`` to the tenant resolved for the current request."""
    return tenant_scoped(statement, model, require_tenant().tenant_id)
