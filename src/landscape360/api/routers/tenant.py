"""Current-tenant endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from landscape360.api.dependencies import (
    get_current_tenant,
    get_request_settings,
    get_tenant_context,
    require_tenant_access,
)
from landscape360.api.schemas.tenant import (
    SubscriptionInfo,
    TenantDetail,
    TenantDetailResponse,
    TenantInfoResponse,
    TenantPublicInfo,
)
from landscape360.config.settings import Settings
from landscape360.core.context import TenantContext
from landscape360.db.schemas.tenant import TenantSnapshot
from landscape360.tenancy.access import Principal
from landscape360.tenancy.domains import build_tenant_frontend_url

router = APIRouter(prefix="/tenant", tags=["tenant"])


@router.get(
    "/info",
    response_model=TenantInfoResponse,
    summary="Public info for the current tenant",
    description="Returns the tenant resolved from the request, or no data on platform domains.",
)
async def get_tenant_info(
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
) -> TenantInfoResponse:
    if ctx.tenant is None:
        return TenantInfoResponse(data=None, message="No tenant context - platform domain")
    return TenantInfoResponse(data=TenantPublicInfo.model_validate(ctx.tenant))


@router.get(
    "/me",
    response_model=TenantDetailResponse,
    summary="Full record of the current tenant",
    description="Requires a token belonging to the resolved tenant (or a super admin).",
)
async def get_my_tenant(
    request: Request,
    principal: Annotated[Principal, Depends(require_tenant_access)],
    tenant: Annotated[TenantSnapshot, Depends(get_current_tenant)],
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> TenantDetailResponse:
    """Return the tenant with its subscription and public frontend URL."""
    public = TenantPublicInfo.model_validate(tenant)
    detail = TenantDetail(
        **public.model_dump(),
        subscription=SubscriptionInfo(
            plan=tenant.subscription_plan,
            status=tenant.subscription_status,
            billing_cycle=tenant.billing_cycle,
        ),
        frontend_url=build_tenant_frontend_url(
            tenant,
            prefer_host=request.headers.get("Origin"),
            settings=settings,
        ),
    )
    return TenantDetailResponse(data=detail)
