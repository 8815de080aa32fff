"""Health check response schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class HealthStatus(str, Enum):
    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class LivenessResponse(BaseModel):
    """Process is up and serving requests."""

    status: HealthStatus = HealthStatus.HEALTHY
    version: str
    environment: str
    timestamp: datetime


class DirectoryHealth(BaseModel):
    """Result of a single tenant directory lookup."""

    status: HealthStatus
    latency_ms: float = Field(..., description="Lookup round trip in milliseconds")
    reason: str | None = Field(
        default=None, description="Failure class when the directory is unreachable"
    )


class DirectoryHealthResponse(LivenessResponse):
    """Liveness plus tenant directory reachability."""

    directory: DirectoryHealth
