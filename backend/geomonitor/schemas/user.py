"""
User Pydantic schemas.
"""

from pydantic import BaseModel
from typing import Optional
from uuid import UUID


class UserSummary(BaseModel):
    """Public projection of a user when embedded in another entity."""
    id: UUID
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

    class Config:
        from_attributes = True
