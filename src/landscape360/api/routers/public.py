"""Public endpoints for tenant and platform websites."""

from typing import Annotated

from fastapi import APIRouter, Depends

from landscape360.api.dependencies import get_request_settings, get_tenant_context
from landscape360.api.schemas.tenant import ContactInfo, ContactInfoResponse
from landscape360.config.settings import Settings
from landscape360.core.context import TenantContext

router = APIRouter(prefix="/public", tags=["public"])


@router.get(
    "/contact-info",
    response_model=ContactInfoResponse,
    summary="Business contact details",
    description="Contact details of the current tenant, or of the platform on platform domains.",
)
async def get_contact_info(
    ctx: Annotated[TenantContext, Depends(get_tenant_context)],
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> ContactInfoResponse:
    tenant = ctx.tenant
    if tenant is None:
        contact = ContactInfo(
            business_name=settings.SUPERADMIN_BUSINESS_NAME,
            email=settings.SUPER_ADMIN_EMAIL,
            phone=settings.SUPER_ADMIN_PHONE,
            address=settings.SUPERADMIN_ADDRESS,
        )
    else:
        # Tenants without phone or address fall back to the platform values
        contact = ContactInfo(
            business_name=tenant.name,
            email=tenant.email,
            phone=tenant.phone or settings.SUPER_ADMIN_PHONE,
            address=tenant.address or settings.SUPERADMIN_ADDRESS,
        )
    return ContactInfoResponse(data=contact)
