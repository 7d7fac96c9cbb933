"""
API router that aggregates all endpoint routers.
All entity routes require a resolved principal; health is public.
"""

from fastapi import APIRouter, Depends

from geomonitor.api.v1.middleware import require_principal
from geomonitor.api.v1.endpoints import (
    health,
    regions,
    configs,
    requests,
)

api_router = APIRouter()

# Public routes
api_router.include_router(health.router, tags=["health"])

# Protected routes
api_router.include_router(
    regions.router,
    prefix="/regions",
    tags=["regions"],
    dependencies=[Depends(require_principal)],
)
api_router.include_router(
    configs.router,
    prefix="/configs",
    tags=["configs"],
    dependencies=[Depends(require_principal)],
)
api_router.include_router(
    requests.router,
    prefix="/requests",
    tags=["requests"],
    dependencies=[Depends(require_principal)],
)
