"""
Region (Wereda) Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID


class RegionCreate(BaseModel):
    """
    Schema for creating a region.

    Fields are optional here so that missing values are reported together
    by the controller as a creation error.
    """
    w_name: Optional[str] = Field(None, max_length=255)
    w_code: Optional[str] = Field(None, max_length=50)


class RegionUpdate(BaseModel):
    """Schema for updating a region (all fields optional)."""
    w_name: Optional[str] = Field(None, min_length=1, max_length=255)
    w_code: Optional[str] = Field(None, min_length=1, max_length=50)


class RegionResponse(BaseModel):
    """Schema for region response."""
    id: UUID
    w_name: str
    w_code: str
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
