"""
Geoconfig API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from geomonitor.api.v1.middleware import require_principal
from geomonitor.controllers.geoconfig_controller import GeoconfigController
from geomonitor.core.exceptions import GEOCONFIG_ERRORS, typed_error_route
from geomonitor.core.permissions import PermissionChecker
from geomonitor.db.session import get_db
from geomonitor.deps.di_container import get_permission_checker
from geomonitor.schemas.geoconfig import GeoconfigCreate, GeoconfigUpdate, GeoconfigResponse
from geomonitor.schemas.pagination import PaginatedResponse
from geomonitor.schemas.principal import Principal

router = APIRouter(route_class=typed_error_route(GEOCONFIG_ERRORS))


def get_geoconfig_controller(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_principal),
    permissions: PermissionChecker = Depends(get_permission_checker),
) -> GeoconfigController:
    return GeoconfigController(db, principal, permissions)


@router.post("/create", response_model=GeoconfigResponse, status_code=status.HTTP_201_CREATED)
async def create_geoconfig(
    geoconfig_data: GeoconfigCreate,
    controller: GeoconfigController = Depends(get_geoconfig_controller),
) -> GeoconfigResponse:
    """Create a monitoring configuration. A user may own only one."""
    return await controller.create(geoconfig_data)


@router.get("/paginate", response_model=PaginatedResponse[GeoconfigResponse])
async def list_geoconfigs(
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None),
    sort_by: Optional[str] = Query(None),
    controller: GeoconfigController = Depends(get_geoconfig_controller),
) -> PaginatedResponse[GeoconfigResponse]:
    """List configurations in the principal's branches, one page at a time."""
    return await controller.fetch_all_paginated(page=page, per_page=per_page, sort_by=sort_by)


@router.get("/search", response_model=List[GeoconfigResponse])
async def search_geoconfigs(
    request: Request,
    controller: GeoconfigController = Depends(get_geoconfig_controller),
) -> List[GeoconfigResponse]:
    """Search configurations by field values."""
    return await controller.search(dict(request.query_params))


@router.get("/{geoconfig_id}", response_model=GeoconfigResponse)
async def get_geoconfig(
    geoconfig_id: UUID,
    controller: GeoconfigController = Depends(get_geoconfig_controller),
) -> GeoconfigResponse:
    """Get configuration by ID with its user and branch."""
    return await controller.fetch_one(geoconfig_id)


@router.put("/{geoconfig_id}", response_model=GeoconfigResponse)
async def update_geoconfig(
    geoconfig_id: UUID,
    geoconfig_data: GeoconfigUpdate,
    controller: GeoconfigController = Depends(get_geoconfig_controller),
) -> GeoconfigResponse:
    """Update a configuration."""
    return await controller.update(geoconfig_id, geoconfig_data)


@router.delete("/{geoconfig_id}", response_model=GeoconfigResponse)
async def delete_geoconfig(
    geoconfig_id: UUID,
    controller: GeoconfigController = Depends(get_geoconfig_controller),
) -> GeoconfigResponse:
    """Delete a configuration."""
    return await controller.remove(geoconfig_id)
