"""
ProcessingRequest model for external geospatial processing requests.
"""

from sqlalchemy import Column, String, ForeignKey, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
import uuid

from geomonitor.db.base import Base


class ProcessingRequest(Base):
    """Processing request submitted to the external geospatial API."""

    __tablename__ = "requests"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    branch_id = Column(UUID(as_uuid=True), ForeignKey("branches.id"), nullable=False, index=True)
    config_id = Column(UUID(as_uuid=True), ForeignKey("geoconfigs.id"), nullable=False, index=True)
    indicator = Column(String(50), nullable=True)
    external_uid = Column(String(255), nullable=True, unique=True, index=True)  # idempotency key
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Relationships
    branch = relationship("Branch")
    config = relationship("Geoconfig")
