"""
Processing request controller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.controllers.base_controller import EntityController
from geomonitor.core.exceptions import REQUEST_ERRORS
from geomonitor.core.permissions import PermissionCategory, PermissionChecker
from geomonitor.schemas.principal import Principal
from geomonitor.schemas.request import ProcessingRequestCreate, ProcessingRequestResponse
from geomonitor.services.request_service import RequestService


class RequestController(EntityController):
    """
    Controller for processing request operations.

    Creation is idempotent on ``external_uid``: a repeated create returns
    the stored request and records no audit event.
    """

    category = PermissionCategory.USER
    errors = REQUEST_ERRORS
    event_entity = "request"
    label = "Request"
    branch_scoped = True
    required_fields = {
        "branch_id": "Request Branch Reference is Empty!!",
        "config_id": "Request Config Reference is Empty!!",
    }

    def __init__(self, session: AsyncSession, principal: Principal, permissions: PermissionChecker):
        super().__init__(session, RequestService(session), principal, permissions)

    def _describe(self, record: ProcessingRequestResponse) -> str:
        return record.external_uid or str(record.id)

    async def _create(self, data: ProcessingRequestCreate):
        return await self.service.get_or_create(data)
