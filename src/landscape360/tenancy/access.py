"""Tenant membership checks for authenticated requests."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from landscape360.core.context import TenantContext, get_current_context_or_none
from landscape360.core.exceptions import TenantAccessDeniedError
from landscape360.core.logging import get_logger

logger = get_logger("landscape360.tenancy.access")


class UserRole(str, Enum):
    """Roles carried by authenticated principals."""

    SUPER_ADMIN = "superAdmin"  # Platform operator, not bound to a tenant
    TENANT_ADMIN = "tenantAdmin"
    PROFESSIONAL = "professional"
    STAFF = "staff"
    CUSTOMER = "customer"


class Principal(BaseModel):
    """Authenticated user as seen by request handlers."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    role: UserRole
    tenant_id: UUID | None = None
    email: str | None = None

    @property
    def is_super_admin(self) -> bool:
        return self.role == UserRole.SUPER_ADMIN


def validate_tenant_access(
    principal: Principal | None,
    context: TenantContext | None = None,
) -> None:
    """Ensure ``principal`` belongs to the tenant resolved for the request.

    Args:
        principal: Authenticated user, or None for anonymous requests
        context: Tenant context to check against (default: current context)

    Raises:
        TenantAccessDeniedError: If the principal's tenant differs from the
            request's tenant
    """
    if principal is None or principal.is_super_admin:
        return

    if context is None:
        context = get_current_context_or_none()
    if context is None or not context.has_tenant:
        return

    if principal.tenant_id != context.tenant_id:
        logger.warning(
            "tenant_access_denied",
            user_id=principal.user_id,
            principal_tenant_id=str(principal.tenant_id) if principal.tenant_id else None,
            tenant_id=str(context.tenant_id),
        )
        raise TenantAccessDeniedError(context.tenant_id, principal.tenant_id)


def check_tenant_access(
    principal: Principal | None,
    context: TenantContext | None = None,
) -> bool:
    """Return whether ``principal`` may act within the request's tenant."""
    try:
        validate_tenant_access(principal, context)
    except TenantAccessDeniedError:
        return False
    return True
