"""
Region (Wereda) API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from geomonitor.api.v1.middleware import require_principal
from geomonitor.controllers.region_controller import RegionController
from geomonitor.core.exceptions import REGION_ERRORS, typed_error_route
from geomonitor.core.permissions import PermissionChecker
from geomonitor.db.session import get_db
from geomonitor.deps.di_container import get_permission_checker
from geomonitor.schemas.pagination import PaginatedResponse
from geomonitor.schemas.principal import Principal
from geomonitor.schemas.region import RegionCreate, RegionUpdate, RegionResponse

router = APIRouter(route_class=typed_error_route(REGION_ERRORS))


def get_region_controller(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_principal),
    permissions: PermissionChecker = Depends(get_permission_checker),
) -> RegionController:
    return RegionController(db, principal, permissions)


@router.post("/create", response_model=RegionResponse, status_code=status.HTTP_201_CREATED)
async def create_region(
    region_data: RegionCreate,
    controller: RegionController = Depends(get_region_controller),
) -> RegionResponse:
    """Create a new region. Name and code must be unique."""
    return await controller.create(region_data)


@router.get("/paginate", response_model=PaginatedResponse[RegionResponse])
async def list_regions(
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None),
    sort_by: Optional[str] = Query(None),
    controller: RegionController = Depends(get_region_controller),
) -> PaginatedResponse[RegionResponse]:
    """List regions one page at a time, newest first unless sort_by is given."""
    return await controller.fetch_all_paginated(page=page, per_page=per_page, sort_by=sort_by)


@router.get("/search", response_model=List[RegionResponse])
async def search_regions(
    request: Request,
    controller: RegionController = Depends(get_region_controller),
) -> List[RegionResponse]:
    """Search regions by any of id, w_name, w_code."""
    return await controller.search(dict(request.query_params))


@router.get("/{region_id}", response_model=RegionResponse)
async def get_region(
    region_id: UUID,
    controller: RegionController = Depends(get_region_controller),
) -> RegionResponse:
    """Get region by ID."""
    return await controller.fetch_one(region_id)


@router.put("/{region_id}", response_model=RegionResponse)
async def update_region(
    region_id: UUID,
    region_data: RegionUpdate,
    controller: RegionController = Depends(get_region_controller),
) -> RegionResponse:
    """Update a region with the given fields only."""
    return await controller.update(region_id, region_data)


@router.delete("/{region_id}", response_model=RegionResponse)
async def delete_region(
    region_id: UUID,
    controller: RegionController = Depends(get_region_controller),
) -> RegionResponse:
    """Delete a region and detach it from every branch. Returns the deleted region."""
    return await controller.remove(region_id)
