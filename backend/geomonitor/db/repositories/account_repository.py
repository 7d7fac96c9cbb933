"""
Account repository for database operations.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.account import Account


class AccountRepository(BaseRepository[Account]):
    """Repository for account operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(Account, session)

    async def get_by_user(self, user_id: UUID) -> Optional[Account]:
        """Get the account of a user."""
        result = await self.session.execute(
            select(Account).where(Account.user_id == user_id)
        )
        return result.scalar_one_or_none()
