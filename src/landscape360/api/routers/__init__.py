"""API routers."""

from fastapi import APIRouter

from .health import router as health_router
from .public import router as public_router
from .super_admin import router as super_admin_router
from .tenant import router as tenant_router

# Routers mounted under the configured API prefix
v1_router = APIRouter()
v1_router.include_router(tenant_router)
v1_router.include_router(public_router)
v1_router.include_router(super_admin_router)

__all__ = ["health_router", "v1_router"]
