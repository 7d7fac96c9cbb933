"""
Processing request API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from geomonitor.api.v1.middleware import require_principal
from geomonitor.controllers.request_controller import RequestController
from geomonitor.core.exceptions import REQUEST_ERRORS, typed_error_route
from geomonitor.core.permissions import PermissionChecker
from geomonitor.db.session import get_db
from geomonitor.deps.di_container import get_permission_checker
from geomonitor.schemas.pagination import PaginatedResponse
from geomonitor.schemas.principal import Principal
from geomonitor.schemas.request import (
    ProcessingRequestCreate,
    ProcessingRequestUpdate,
    ProcessingRequestResponse,
)

router = APIRouter(route_class=typed_error_route(REQUEST_ERRORS))


def get_request_controller(
    db: AsyncSession = Depends(get_db),
    principal: Principal = Depends(require_principal),
    permissions: PermissionChecker = Depends(get_permission_checker),
) -> RequestController:
    return RequestController(db, principal, permissions)


@router.post("/create", response_model=ProcessingRequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request(
    request_data: ProcessingRequestCreate,
    controller: RequestController = Depends(get_request_controller),
) -> ProcessingRequestResponse:
    """
    Record a processing request.
    Posting an external_uid that is already stored returns the stored request.
    """
    return await controller.create(request_data)


@router.get("/paginate", response_model=PaginatedResponse[ProcessingRequestResponse])
async def list_requests(
    page: Optional[int] = Query(None),
    per_page: Optional[int] = Query(None),
    sort_by: Optional[str] = Query(None),
    controller: RequestController = Depends(get_request_controller),
) -> PaginatedResponse[ProcessingRequestResponse]:
    """List requests in the principal's branches, one page at a time."""
    return await controller.fetch_all_paginated(page=page, per_page=per_page, sort_by=sort_by)


@router.get("/search", response_model=List[ProcessingRequestResponse])
async def search_requests(
    request: Request,
    controller: RequestController = Depends(get_request_controller),
) -> List[ProcessingRequestResponse]:
    """Search requests by field values, e.g. external_uid."""
    return await controller.search(dict(request.query_params))


@router.get("/{request_id}", response_model=ProcessingRequestResponse)
async def get_request(
    request_id: UUID,
    controller: RequestController = Depends(get_request_controller),
) -> ProcessingRequestResponse:
    """Get request by ID with its branch and config."""
    return await controller.fetch_one(request_id)


@router.put("/{request_id}", response_model=ProcessingRequestResponse)
async def update_request(
    request_id: UUID,
    request_data: ProcessingRequestUpdate,
    controller: RequestController = Depends(get_request_controller),
) -> ProcessingRequestResponse:
    """Update a request."""
    return await controller.update(request_id, request_data)


@router.delete("/{request_id}", response_model=ProcessingRequestResponse)
async def delete_request(
    request_id: UUID,
    controller: RequestController = Depends(get_request_controller),
) -> ProcessingRequestResponse:
    """Delete a request."""
    return await controller.remove(request_id)
