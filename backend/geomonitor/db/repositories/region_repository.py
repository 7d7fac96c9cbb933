"""
Region repository for database operations.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, or_

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.region import Region


class RegionRepository(BaseRepository[Region]):
    """Repository for region operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Region, session)

    async def find_by_name_or_code(self, w_name: str, w_code: str) -> Optional[Region]:
        """Get a region sharing either the name or the code."""
        result = await self.session.execute(
            select(Region).where(or_(Region.w_name == w_name, Region.w_code == w_code)).limit(1)
        )
        return result.scalars().first()
