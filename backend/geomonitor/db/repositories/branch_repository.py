"""
Branch repository for database operations.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.branch import Branch


class BranchRepository(BaseRepository[Branch]):
    """Repository for branch operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Branch, session)

    async def list_all(self) -> List[Branch]:
        """List every branch, unfiltered."""
        result = await self.session.execute(select(Branch))
        return list(result.scalars().all())
