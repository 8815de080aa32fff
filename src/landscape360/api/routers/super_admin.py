"""Platform administration endpoints.

Everything under this router's prefix is listed in ``ADMIN_PATH_PREFIXES``,
so these handlers always run with an empty tenant context.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from landscape360.api.dependencies import get_tenant_context, require_super_admin
from landscape360.api.schemas.tenant import ResolvedContextResponse
from landscape360.core.context import TenantContext
from landscape360.tenancy.access import Principal

router = APIRouter(prefix="/super-admin", tags=["super-admin"])


@router.get(
    "/context",
    response_model=ResolvedContextResponse,
    summary="Inspect the request's tenant context",
)
async def get_admin_context(
    principal: Annotated[Principal, Depends(require_super_admin)],
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
) -> ResolvedContextResponse:
    return ResolvedContextResponse(
        tenant_id=ctx.tenant_id,
        tenant_subdomain=ctx.tenant.subdomain if ctx.tenant else None,
        principal_role=principal.role.value,
    )
