"""
Geoconfig controller.
"""

from typing import Dict, List
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.controllers.base_controller import EntityController
from geomonitor.core.exceptions import GEOCONFIG_ERRORS
from geomonitor.core.permissions import PermissionCategory, PermissionChecker
from geomonitor.schemas.geoconfig import GeoconfigCreate, GeoconfigResponse, GeoconfigUpdate
from geomonitor.schemas.principal import Principal
from geomonitor.services.geoconfig_service import GeoconfigService


class GeoconfigController(EntityController):
    """Controller for geoconfig operations. Listings are scoped to the principal's branches."""

    category = PermissionCategory.USER
    errors = GEOCONFIG_ERRORS
    event_entity = "geoconfig"
    label = "Geoconfig"
    branch_scoped = True
    required_fields = {
        "user_id": "Geoconfig User Reference is Empty!!",
        "name": "Geoconfig Name is Empty!!",
        "branch_id": "Geoconfig Branch is Empty!!",
    }
    INVERTED_WINDOW_MESSAGE = "Geoconfig to_date is before from_date!!"

    def __init__(self, session: AsyncSession, principal: Principal, permissions: PermissionChecker):
        super().__init__(session, GeoconfigService(session), principal, permissions)

    def _describe(self, record: GeoconfigResponse) -> str:
        return record.name

    def _validate(self, data: GeoconfigCreate) -> List[Dict[str, str]]:
        violations = super()._validate(data)
        if data.from_date and data.to_date and data.from_date > data.to_date:
            violations.append({"field": "to_date", "message": self.INVERTED_WINDOW_MESSAGE})
        return violations

    async def _check_update(self, record_id: UUID, data: GeoconfigUpdate) -> None:
        stored = await self.service.get(id=record_id)
        if stored is None:
            return
        changes = data.model_dump(exclude_unset=True)
        from_date = changes.get("from_date", stored.from_date)
        to_date = changes.get("to_date", stored.to_date)
        if from_date and to_date and from_date > to_date:
            raise ValueError(self.INVERTED_WINDOW_MESSAGE)

    async def _check_create(self, data: GeoconfigCreate) -> None:
        # One config per user; not backed by a constraint
        if await self.service.get(user_id=data.user_id):
            raise ValueError("Geoconfig For User already exists!!")
