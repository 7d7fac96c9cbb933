"""
Health controller.
"""

from geomonitor.controllers.base_controller import BaseController
from geomonitor.core.logging import get_logger
from geomonitor.schemas.health import HealthResponse
from geomonitor.services.health_service import HealthService

logger = get_logger(__name__)


class HealthController(BaseController):
    """Controller for health check operations."""

    def __init__(self, health_service: HealthService):
        self.health_service = health_service

    async def get_health(self) -> HealthResponse:
        """Get service health; degraded results are logged."""
        health = await self.health_service.get_health()
        if health.status != "ok":
            logger.warning("Service degraded", extra={"checks": health.checks})
        return health
