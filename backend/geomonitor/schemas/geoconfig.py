"""
Geoconfig Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from geomonitor.schemas.branch import BranchSummary
from geomonitor.schemas.user import UserSummary


class GeoconfigCreate(BaseModel):
    """Schema for creating a geoconfig. Presence is checked by the controller."""
    user_id: Optional[UUID] = None
    name: Optional[str] = Field(None, max_length=255)
    branch_id: Optional[UUID] = None
    indicator: Optional[str] = Field(None, max_length=50)
    from_date: Optional[date] = None
    to_date: Optional[date] = None


class GeoconfigUpdate(BaseModel):
    """Schema for updating a geoconfig (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    branch_id: Optional[UUID] = None
    indicator: Optional[str] = Field(None, max_length=50)
    from_date: Optional[date] = None
    to_date: Optional[date] = None


class GeoconfigSummary(BaseModel):
    """Public projection of a geoconfig when embedded in a request."""
    id: UUID
    name: str
    indicator: Optional[str] = None
    from_date: Optional[date] = None
    to_date: Optional[date] = None

    class Config:
        from_attributes = True


class GeoconfigResponse(GeoconfigSummary):
    """Schema for geoconfig response with user and branch populated."""
    user_id: UUID
    branch_id: UUID
    user: Optional[UserSummary] = None
    branch: Optional[BranchSummary] = None
    created_at: datetime
    updated_at: datetime
