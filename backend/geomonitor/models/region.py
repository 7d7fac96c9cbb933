"""
Region (Wereda) model for administrative areas.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.dialects.postgresql import UUID
import uuid

from geomonitor.db.base import Base


class Region(Base):
    """Administrative region (Wereda) that branches can operate in."""

    __tablename__ = "regions"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    w_name = Column(String(255), nullable=False, unique=True, index=True)
    w_code = Column(String(50), nullable=False, unique=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
