"""
User repository for database operations.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.models.user import User


class UserRepository(BaseRepository[User]):
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        super().__init__(User, session)
