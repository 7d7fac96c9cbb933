"""
Processing request service with data-access logic.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.logging import get_logger
from geomonitor.services.base_service import EntityService
from geomonitor.db.repositories.request_repository import RequestRepository
from geomonitor.schemas.request import ProcessingRequestCreate, ProcessingRequestResponse

logger = get_logger(__name__)


class RequestService(EntityService[ProcessingRequestResponse]):
    """Service for processing request operations. Reads populate the branch and config."""

    response_schema = ProcessingRequestResponse
    searchable_fields = frozenset({"id", "branch_id", "config_id", "indicator", "external_uid"})
    entity_name = "processing request"

    def __init__(self, session: AsyncSession):
        super().__init__(session, RequestRepository(session))

    async def get_or_create(self, data: ProcessingRequestCreate) -> tuple[ProcessingRequestResponse, bool]:
        """
        Create a request unless one with the same ``external_uid`` exists.

        Returns:
            Tuple of (request, created) where created is False when an
            existing request was returned unchanged
        """
        if data.external_uid:
            existing = await self.get(external_uid=data.external_uid)
            if existing is not None:
                logger.info(
                    "Processing request already exists, returning it",
                    extra={"external_uid": data.external_uid, "id": str(existing.id)},
                )
                return existing, False

        return await self.create(data), True
