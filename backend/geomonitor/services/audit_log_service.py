"""
Audit log service.
Records one event per mutation or single-record view.
"""

from typing import Any, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.logging import get_logger
from geomonitor.services.base_service import BaseService
from geomonitor.db.repositories.audit_log_repository import AuditLogRepository
from geomonitor.schemas.audit_log import AuditLogResponse

logger = get_logger(__name__)


class AuditLogService(BaseService):
    """Service for audit log operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.audit_log_repo = AuditLogRepository(session)

    async def track(
        self,
        event_name: str,
        actor_id: Optional[UUID],
        message: str,
        diff: Optional[Any] = None,
    ) -> AuditLogResponse:
        """
        Record an audit event.

        Failures propagate so the surrounding transaction is rolled back
        together with the mutation being audited.
        """
        entry = await self.audit_log_repo.create(
            event_name=event_name,
            actor_id=actor_id,
            message=message,
            diff=diff,
        )
        logger.info(
            "Audit event tracked",
            extra={"event_name": event_name, "actor_id": str(actor_id) if actor_id else None},
        )
        return AuditLogResponse.model_validate(entry)

    async def list_for_actor(self, actor_id: UUID) -> List[AuditLogResponse]:
        """List events recorded for an actor."""
        entries = await self.audit_log_repo.list_by_actor(actor_id)
        return [AuditLogResponse.model_validate(entry) for entry in entries]
