"""
Region (Wereda) controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.controllers.base_controller import EntityController
from geomonitor.core.exceptions import REGION_ERRORS
from geomonitor.core.permissions import PermissionCategory, PermissionChecker
from geomonitor.schemas.principal import Principal
from geomonitor.schemas.region import RegionCreate, RegionResponse
from geomonitor.services.branch_service import BranchService
from geomonitor.services.region_service import RegionService


class RegionController(EntityController):
    """Controller for region operations. Removing a region detaches it from every branch."""

    category = PermissionCategory.WEREDA
    errors = REGION_ERRORS
    event_entity = "wereda"
    label = "Wereda"
    required_fields = {
        "w_name": "Wereda Name is Empty!!",
        "w_code": "Wereda code is Empty!!",
    }

    def __init__(self, session: AsyncSession, principal: Principal, permissions: PermissionChecker):
        super().__init__(session, RegionService(session), principal, permissions)
        self.branch_service = BranchService(session)

    def _describe(self, record: RegionResponse) -> str:
        return record.w_name

    async def _check_create(self, data: RegionCreate) -> None:
        if await self.service.find_conflict(data.w_name, data.w_code):
            raise ValueError("Wereda already exists!!")

    async def _after_remove(self, record: RegionResponse) -> None:
        await self.branch_service.remove_region(record.id)
