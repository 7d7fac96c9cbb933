"""
Audit log repository for database operations.
"""

from typing import List
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.audit_log import AuditLog


class AuditLogRepository(BaseRepository[AuditLog]):
    """Repository for audit log operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(AuditLog, session)

    async def list_by_actor(self, actor_id: UUID) -> List[AuditLog]:
        """List events recorded for an actor, oldest first."""
        result = await self.session.execute(
            select(AuditLog)
            .where(AuditLog.actor_id == actor_id)
            .order_by(AuditLog.created_at, AuditLog.id)
        )
        return list(result.scalars().all())
