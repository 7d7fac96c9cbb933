"""
Geoconfig service with data-access logic.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.services.base_service import EntityService
from geomonitor.db.repositories.geoconfig_repository import GeoconfigRepository
from geomonitor.schemas.geoconfig import GeoconfigResponse


class GeoconfigService(EntityService[GeoconfigResponse]):
    """Service for geoconfig operations. Reads populate the owning user and branch."""

    response_schema = GeoconfigResponse
    searchable_fields = frozenset({"id", "user_id", "branch_id", "name", "indicator", "from_date", "to_date"})
    entity_name = "geoconfig"

    def __init__(self, session: AsyncSession):
        super().__init__(session, GeoconfigRepository(session))
