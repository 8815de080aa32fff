"""Tenant response schemas."""

from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from landscape360.db.models.tenant import BillingCycle, SubscriptionStatus


class TenantPublicInfo(BaseModel):
    """Tenant details safe to show on the tenant's public site."""

    model_config = ConfigDict(from_attributes=True)

    tenant_id: UUID
    name: str
    email: str
    subdomain: str
    domain: str | None = None
    custom_domains: list[str] = Field(default_factory=list)
    address: str | None = None
    phone: str | None = None
    settings: dict[str, Any] = Field(default_factory=dict)


class SubscriptionInfo(BaseModel):
    """Subscription state of a tenant."""

    plan: str
    status: SubscriptionStatus
    billing_cycle: BillingCycle


class TenantDetail(TenantPublicInfo):
    """Full tenant record for the tenant's own administrators."""

    subscription: SubscriptionInfo
    frontend_url: str


class TenantInfoResponse(BaseModel):
    """Response for the public tenant info endpoint."""

    success: bool = True
    data: TenantPublicInfo | None = None
    message: str | None = None


class TenantDetailResponse(BaseModel):
    """Response for the tenant admin endpoint."""

    success: bool = True
    data: TenantDetail


class ContactInfo(BaseModel):
    """Business contact details for the current site."""

    business_name: str
    email: str
    phone: str
    address: str


class ContactInfoResponse(BaseModel):
    success: bool = True
    data: ContactInfo


class ResolvedContextResponse(BaseModel):
    """Describes the tenant context a request ran under."""

    success: bool = True
    tenant_id: UUID | None = None
    tenant_subdomain: str | None = None
    principal_role: str | None = None
