"""Pydantic schemas for tenant records."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from landscape360.db.models.tenant import BillingCycle, SubscriptionStatus


class TenantSnapshot(BaseModel):
    """Read-only copy of a tenant row.

    The tenant resolver publishes snapshots rather than ORM instances so the
    tenant context stays usable after the lookup session is closed, and so no
    downstream code can mutate the directory through the context.
    """

    model_config = ConfigDict(from_attributes=True, frozen=True)

    tenant_id: UUID
    name: str
    email: str
    subdomain: str
    domain: str | None = None
    custom_domains: tuple[str, ...] = ()
    address: str | None = None
    phone: str | None = None
    subscription_plan: str = "none"
    subscription_status: SubscriptionStatus = SubscriptionStatus.TRIALING
    billing_cycle: BillingCycle = BillingCycle.MONTHLY
    settings: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def is_inactive(self) -> bool:
        """Whether requests for this tenant must be rejected."""
        return self.subscription_status == SubscriptionStatus.INACTIVE
