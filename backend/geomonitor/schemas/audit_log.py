"""
Audit log Pydantic schemas.
"""

from pydantic import BaseModel
from typing import Any, Optional
from datetime import datetime
from uuid import UUID


class AuditLogResponse(BaseModel):
    """Acknowledgement of a tracked event."""
    id: UUID
    event_name: str
    actor_id: Optional[UUID] = None
    message: str
    diff: Optional[Any] = None
    created_at: datetime

    class Config:
        from_attributes = True
