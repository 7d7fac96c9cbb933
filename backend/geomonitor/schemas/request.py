"""
Processing request Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID

from geomonitor.schemas.branch import BranchSummary
from geomonitor.schemas.geoconfig import GeoconfigSummary


class ProcessingRequestCreate(BaseModel):
    """Schema for creating a processing request. Presence is checked by the controller."""
    branch_id: Optional[UUID] = None
    config_id: Optional[UUID] = None
    indicator: Optional[str] = Field(None, max_length=50)
    external_uid: Optional[str] = Field(None, max_length=255)


class ProcessingRequestUpdate(BaseModel):
    """Schema for updating a processing request (all fields optional)."""
    branch_id: Optional[UUID] = None
    config_id: Optional[UUID] = None
    indicator: Optional[str] = Field(None, max_length=50)
    external_uid: Optional[str] = Field(None, max_length=255)


class ProcessingRequestResponse(BaseModel):
    """Schema for processing request response with branch and config populated."""
    id: UUID
    branch_id: UUID
    config_id: UUID
    indicator: Optional[str] = None
    external_uid: Optional[str] = None
    branch: Optional[BranchSummary] = None
    config: Optional[GeoconfigSummary] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
