"""Liveness and tenant directory health endpoints.

Both routes are served on every host without tenant resolution, so load
balancers can probe any tenant domain.
"""

import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from landscape360.api.dependencies import get_request_settings
from landscape360.api.schemas.health import (
    DirectoryHealth,
    DirectoryHealthResponse,
    HealthStatus,
    LivenessResponse,
)
from landscape360.config.settings import Settings
from landscape360.core.exceptions import TenantDirectoryUnavailableError
from landscape360.core.logging import get_logger
from landscape360.tenancy.directory import TenantDirectory

logger = get_logger("landscape360.api.health")

router = APIRouter(prefix="/health", tags=["health"])

APP_VERSION = "0.1.0"

# Never a valid subdomain, so the lookup exercises the query without a hit
DIRECTORY_PROBE_KEY = "__health__"


@router.get("", response_model=LivenessResponse)
async def liveness(
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> LivenessResponse:
    return LivenessResponse(
        version=APP_VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/directory",
    response_model=DirectoryHealthResponse,
    responses={503: {"model": DirectoryHealthResponse}},
)
async def directory_health(
    request: Request,
    response: Response,
    settings: Annotated[Settings, Depends(get_request_settings)],
) -> DirectoryHealthResponse:
    """Check that the tenant directory answers lookups.

    Makes one lookup with no retries. Returns 503 when the directory
    reports itself unavailable.
    """
    directory = request.app.state.tenant_resolver.directory
    result = await check_directory(directory)
    if result.status is HealthStatus.UNHEALTHY:
        response.status_code = 503

    return DirectoryHealthResponse(
        status=result.status,
        version=APP_VERSION,
        environment=settings.ENVIRONMENT,
        timestamp=datetime.now(UTC),
        directory=result,
    )


async def check_directory(directory: TenantDirectory) -> DirectoryHealth:
    """Time a single lookup against ``directory``."""
    start = time.perf_counter()
    try:
        await directory.find_by_subdomain(DIRECTORY_PROBE_KEY)
    except TenantDirectoryUnavailableError as e:
        logger.warning("tenant_directory_unhealthy", reason=e.reason)
        return DirectoryHealth(
            status=HealthStatus.UNHEALTHY,
            latency_ms=_elapsed_ms(start),
            reason=e.reason,
        )
    return DirectoryHealth(status=HealthStatus.HEALTHY, latency_ms=_elapsed_ms(start))


def _elapsed_ms(start: float) -> float:
    return round((time.perf_counter() - start) * 1000, 2)
