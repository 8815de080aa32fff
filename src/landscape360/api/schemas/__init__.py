"""API request and response schemas."""

from .errors import APIError, ErrorCode
from .health import DirectoryHealth, DirectoryHealthResponse, HealthStatus, LivenessResponse
from .tenant import (
    ContactInfo,
    ContactInfoResponse,
    ResolvedContextResponse,
    SubscriptionInfo,
    TenantDetail,
    TenantDetailResponse,
    TenantInfoResponse,
    TenantPublicInfo,
)

__all__ = [
    # Errors
    "APIError",
    "ErrorCode",
    # Health
    "DirectoryHealth",
    "DirectoryHealthResponse",
    "HealthStatus",
    "LivenessResponse",
    # Tenant
    "ContactInfo",
    "ContactInfoResponse",
    "ResolvedContextResponse",
    "SubscriptionInfo",
    "TenantDetail",
    "TenantDetailResponse",
    "TenantInfoResponse",
    "TenantPublicInfo",
]
