"""
Geoconfig repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.geoconfig import Geoconfig


class GeoconfigRepository(BaseRepository[Geoconfig]):
    """Repository for geoconfig operations."""

    population = ("user", "branch")

    def __init__(self, session: AsyncSession):
        super().__init__(Geoconfig, session)
