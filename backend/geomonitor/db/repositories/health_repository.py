"""
Health repository.
Probes the database and reports the size of the monitored collections.
"""

from typing import Dict

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import func, select, text
from sqlalchemy.exc import SQLAlchemyError

from geomonitor.core.logging import get_logger
from geomonitor.models import Region, Geoconfig, ProcessingRequest

logger = get_logger(__name__)


class HealthRepository:
    """Repository for health check operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def check_database(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if database is accessible, False otherwise
        """
        try:
            result = await self.session.execute(text("SELECT 1"))
            return result.scalar() == 1
        except SQLAlchemyError as exc:
            logger.warning("Database health check failed", extra={"error": str(exc)})
            return False

    async def collection_counts(self) -> Dict[str, int]:
        """Count rows of each monitored collection."""
        counts = {}
        for name, model in (
            ("regions", Region),
            ("configs", Geoconfig),
            ("requests", ProcessingRequest),
        ):
            result = await self.session.execute(select(func.count()).select_from(model))
            counts[name] = result.scalar_one()
        return counts
