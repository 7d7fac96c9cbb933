"""
Branch Pydantic schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from uuid import UUID


class BranchSummary(BaseModel):
    """Public projection of a branch when embedded in another entity."""
    id: UUID
    name: str
    location: Optional[str] = None

    class Config:
        from_attributes = True


class BranchResponse(BranchSummary):
    """Schema for branch response."""
    weredas: List[UUID] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
