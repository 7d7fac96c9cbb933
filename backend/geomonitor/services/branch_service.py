"""
Branch service.
Maintains the region list embedded in each branch.
"""

from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.logging import get_logger
from geomonitor.services.base_service import EntityService
from geomonitor.db.repositories.branch_repository import BranchRepository
from geomonitor.schemas.branch import BranchResponse

logger = get_logger(__name__)


class BranchService(EntityService[BranchResponse]):
    """Service for branch operations."""

    response_schema = BranchResponse
    entity_name = "branch"

    def __init__(self, session: AsyncSession):
        super().__init__(session, BranchRepository(session))

    async def remove_region(self, region_id: UUID) -> int:
        """
        Strip a region from every branch that lists it.

        Scans all branches; each affected branch is rewritten with the
        remaining regions in their original order.

        Returns:
            Number of branches changed
        """
        target = str(region_id)
        changed = 0
        for branch in await self.repo.list_all():
            weredas = list(branch.weredas or [])
            remaining = [item for item in weredas if str(item) != target]
            if len(remaining) == len(weredas):
                continue
            await self.repo.update(branch.id, weredas=remaining)
            changed += 1

        logger.info(
            "Removed region from branches",
            extra={"region_id": target, "branches_changed": changed},
        )
        return changed
