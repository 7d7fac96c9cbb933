"""
Principal service.
Resolves the acting user together with the branch access of their account.
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.services.base_service import BaseService
from geomonitor.db.repositories.user_repository import UserRepository
from geomonitor.db.repositories.account_repository import AccountRepository
from geomonitor.schemas.principal import AccountScope, Principal


class PrincipalService(BaseService):
    """Service for principal resolution."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.account_repo = AccountRepository(session)

    async def resolve(self, user_id: UUID) -> Optional[Principal]:
        """Get the principal for a user id, or None when the user is unknown."""
        user = await self.user_repo.get(user_id)
        if user is None:
            return None

        account = await self.account_repo.get_by_user(user.id)
        return Principal(
            id=user.id,
            role=user.role,
            account=AccountScope.model_validate(account) if account else None,
        )
