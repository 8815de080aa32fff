"""Tenant model for multi-tenancy support."""

from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Enum as SAEnum, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class SubscriptionStatus(str, Enum):
    """Billing status of a tenant's subscription."""

    ACTIVE = "active"
    INACTIVE = "inactive"  # Requests for this tenant are rejected
    TRIALING = "trialing"
    SUSPENDED = "suspended"


class BillingCycle(str, Enum):
    """Billing interval for a subscription."""

    MONTHLY = "monthly"
    YEARLY = "yearly"


class Tenant(TimestampMixin, Base):
    """Tenant (landscaping business) in the system.

    Each tenant is reached through its subdomain (``acme.delxn.club``) or,
    optionally, an apex/custom domain. All tenant-owned data is partitioned
    by tenant_id.
    """

    __tablename__ = "tenants"

    tenant_id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    # Routing
    subdomain: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    domain: Mapped[str | None] = mapped_column(String(255), nullable=True)
    custom_domains: Mapped[list[str]] = mapped_column(default=list, nullable=False)

    # Contact
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Subscription
    subscription_plan: Mapped[str] = mapped_column(String(100), default="none", nullable=False)
    subscription_status: Mapped[SubscriptionStatus] = mapped_column(
        SAEnum(
            SubscriptionStatus,
            name="subscription_status",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=SubscriptionStatus.TRIALING,
        nullable=False,
    )
    billing_cycle: Mapped[BillingCycle] = mapped_column(
        SAEnum(
            BillingCycle,
            name="billing_cycle",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        default=BillingCycle.MONTHLY,
        nullable=False,
    )

    # Branding (logo, theme_color, timezone)
    settings: Mapped[dict[str, Any]] = mapped_column(default=dict, nullable=False)

    def __repr__(self) -> str:
        return f"<Tenant(id={self.tenant_id}, subdomain={self.subdomain})>"
