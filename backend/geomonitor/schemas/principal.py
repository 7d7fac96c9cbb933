"""
Acting principal schemas.
"""

from pydantic import BaseModel, Field
from typing import List, Optional
from uuid import UUID


class AccountScope(BaseModel):
    """Branch access of the principal's account."""
    default_branch_id: Optional[UUID] = None
    access_branches: List[UUID] = Field(default_factory=list)
    multi_branches: bool = False

    class Config:
        from_attributes = True


class Principal(BaseModel):
    """The user performing a request."""
    id: UUID
    role: str
    account: Optional[AccountScope] = None
