"""
Branch model.
"""

from sqlalchemy import Column, String, JSON, DateTime
from sqlalchemy.dialects.postgresql import UUID
import uuid

from geomonitor.db.base import Base


class Branch(Base):
    """Organizational unit holding an ordered list of region ids it serves."""

    __tablename__ = "branches"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    location = Column(String(255), nullable=True)
    weredas = Column(JSON, nullable=False, default=list)  # region ids as strings
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
