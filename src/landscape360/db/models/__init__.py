"""Database models for Landscape360."""

from .base import Base, PortableJSON, TimestampMixin
from .tenant import BillingCycle, SubscriptionStatus, Tenant

__all__ = [
    "Base",
    "BillingCycle",
    "PortableJSON",
    "SubscriptionStatus",
    "Tenant",
    "TimestampMixin",
]
