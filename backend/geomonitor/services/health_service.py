"""
Health service.
Provides health check functionality.
"""

import time

from geomonitor.services.base_service import BaseService
from geomonitor.schemas.health import HealthResponse
from geomonitor.db.repositories.health_repository import HealthRepository
from geomonitor.db import session as db_session
from geomonitor.core.logging import get_logger

logger = get_logger(__name__)


class HealthService(BaseService):
    """Service for health check operations."""

    def __init__(self):
        self.start_time = time.time()

    async def get_health(self) -> HealthResponse:
        """
        Get system health status.

        Returns:
            HealthResponse with status, uptime, checks and collection sizes
        """
        uptime_seconds = int(time.time() - self.start_time)
        uptime_str = f"PT{uptime_seconds}S"  # ISO 8601 duration

        checks = {}
        collections = {}

        if db_session.async_session_maker is None:
            db_session.create_sessionmaker()

        try:
            async with db_session.async_session_maker() as session:
                repo = HealthRepository(session=session)
                db_ok = await repo.check_database()
                checks["database"] = "ok" if db_ok else "error"
                if db_ok:
                    collections = await repo.collection_counts()
        except Exception as exc:  # any failure marks the check degraded
            logger.warning("Health check failed", extra={"error": str(exc)})
            checks["database"] = f"error: {exc}"

        status = "ok" if all(check == "ok" for check in checks.values()) else "degraded"

        return HealthResponse(
            status=status,
            uptime=uptime_str,
            checks=checks,
            collections=collections,
        )
