"""
Region service with data-access logic.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.services.base_service import EntityService
from geomonitor.db.repositories.region_repository import RegionRepository
from geomonitor.schemas.region import RegionResponse


class RegionService(EntityService[RegionResponse]):
    """Service for region operations."""

    response_schema = RegionResponse
    searchable_fields = frozenset({"id", "w_name", "w_code"})
    entity_name = "region"

    def __init__(self, session: AsyncSession):
        super().__init__(session, RegionRepository(session))

    async def find_conflict(self, w_name: str, w_code: str) -> Optional[RegionResponse]:
        """Get an existing region that shares the name or the code."""
        region = await self.repo.find_by_name_or_code(w_name, w_code)
        if region is None:
            return None
        return self._to_response(region)
