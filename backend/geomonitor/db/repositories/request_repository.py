"""
Processing request repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.request import ProcessingRequest


class RequestRepository(BaseRepository[ProcessingRequest]):
    """Repository for processing request operations."""

    population = ("branch", "config")

    def __init__(self, session: AsyncSession):
        super().__init__(ProcessingRequest, session)
