"""
Account model holding a user's branch access.
"""

from sqlalchemy import Column, Boolean, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID
import uuid

from geomonitor.db.base import Base


class Account(Base):
    """Branch access settings for a user."""

    __tablename__ = "accounts"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    default_branch_id = Column(UUID(as_uuid=True), ForeignKey("branches.id"), nullable=True)
    access_branches = Column(JSON, nullable=False, default=list)  # branch ids as strings
    multi_branches = Column(Boolean, default=False, nullable=False)
