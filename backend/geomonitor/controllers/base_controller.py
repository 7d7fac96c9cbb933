"""
Base controller classes.
Controllers authorize the principal, validate input, call one service and
record audit events, mapping every failure to the action's typed error.
"""

from abc import ABC
from typing import Any, Callable, Dict, List, Mapping, Optional
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.config import settings
from geomonitor.core.exceptions import (
    ErrorCatalog,
    GeospatialError,
    PersistenceError,
    PERMISSION_DENIED_MESSAGE,
)
from geomonitor.core.logging import get_logger
from geomonitor.core.permissions import PermissionAction, PermissionCategory, PermissionChecker
from geomonitor.schemas.principal import Principal
from geomonitor.schemas.pagination import PaginatedResponse
from geomonitor.services.audit_log_service import AuditLogService
from geomonitor.services.base_service import EntityService

logger = get_logger(__name__)

# Failures of the data layer that surface as the action's typed error
DATA_ERRORS = (PersistenceError, ValueError, SQLAlchemyError)


class BaseController(ABC):
    """Base controller class for all controllers."""
    pass


class EntityController(BaseController):
    """
    Create / fetch / update / paginate / search / remove for one entity.

    Subclasses declare the permission category, error catalog, audit
    labels and required creation fields, and may override the hooks
    ``_check_create``, ``_check_update``, ``_create`` and ``_after_remove``.
    """

    category: PermissionCategory
    errors: ErrorCatalog
    event_entity: str
    label: str
    required_fields: Mapping[str, str] = {}
    branch_scoped: bool = False

    def __init__(
        self,
        session: AsyncSession,
        service: EntityService,
        principal: Principal,
        permissions: PermissionChecker,
    ):
        self.session = session
        self.service = service
        self.principal = principal
        self.permissions = permissions
        self.audit_log_service = AuditLogService(session)

    def _describe(self, record: Any) -> str:
        return str(record.id)

    async def _authorize(self, action: PermissionAction, error: Callable[..., GeospatialError]) -> None:
        if not await self.permissions.is_permitted(self.principal, self.category, action):
            raise error(PERMISSION_DENIED_MESSAGE)

    def _validate(self, data: BaseModel) -> List[Dict[str, str]]:
        """Collect every missing required field; blank strings count as missing."""
        violations = []
        for field, message in self.required_fields.items():
            value = getattr(data, field, None)
            if value is None or (isinstance(value, str) and not value.strip()):
                violations.append({"field": field, "message": message})
        return violations

    async def _track(self, event_name: str, message: str, diff: Optional[Any] = None) -> None:
        await self.audit_log_service.track(
            event_name=event_name,
            actor_id=self.principal.id,
            message=message,
            diff=diff,
        )

    async def _check_create(self, data: BaseModel) -> None:
        """Pre-creation checks; raise ValueError to reject."""
        return None

    async def _check_update(self, record_id: UUID, data: BaseModel) -> None:
        """Pre-update checks; raise ValueError to reject."""
        return None

    async def _create(self, data: BaseModel) -> tuple[Any, bool]:
        return await self.service.create(data), True

    async def _after_remove(self, record: Any) -> None:
        return None

    async def create(self, data: BaseModel) -> Any:
        """Create a record."""
        logger.info(f"create {self.event_entity}")
        await self._authorize(PermissionAction.CREATE, self.errors.creation)

        violations = self._validate(data)
        if violations:
            raise self.errors.creation(
                "; ".join(violation["message"] for violation in violations),
                details=violations,
            )

        try:
            await self._check_create(data)
            record, created = await self._create(data)
            if created:
                await self._track(
                    f"{self.event_entity}_create",
                    f"Create {self.label} - {self._describe(record)}",
                )
        except DATA_ERRORS as exc:
            raise self.errors.creation(str(exc)) from exc

        return record

    async def fetch_one(self, record_id: UUID) -> Any:
        """Get a single record."""
        logger.info(f"fetch {self.event_entity}: {record_id}")
        await self._authorize(PermissionAction.VIEW, self.errors.view)

        try:
            record = await self.service.get(id=record_id)
            if record is None:
                raise ValueError(f"{self.label} does not exist")

            await self._track(
                f"view_{self.event_entity}",
                f"View {self.label} - {self._describe(record)}",
            )
        except DATA_ERRORS as exc:
            raise self.errors.view(str(exc)) from exc

        return record

    async def update(self, record_id: UUID, data: BaseModel) -> Any:
        """Merge changes into a single record."""
        logger.info(f"updating {self.event_entity}: {record_id}")
        await self._authorize(PermissionAction.UPDATE, self.errors.update)

        try:
            await self._check_update(record_id, data)
            record = await self.service.update({"id": record_id}, data)
            if record is None:
                raise ValueError(f"{self.label} does not exist")

            await self._track(
                f"{self.event_entity}_update",
                f"Update Info for {self._describe(record)}",
                diff=data.model_dump(mode="json", exclude_unset=True),
            )
        except DATA_ERRORS as exc:
            raise self.errors.update(str(exc)) from exc

        return record

    async def _branch_scope(self) -> Dict[str, Any]:
        """
        Restrict listings to the branches the principal's account can see.

        Principals without an account, or with multi-branch accounts and
        VIEW_ALL, see everything. Otherwise the account's access branches,
        then its default branch, apply. Accounts with neither see
        everything only with VIEW_ALL and nothing otherwise.
        """
        can_view_all = await self.permissions.is_permitted(
            self.principal, self.category, PermissionAction.VIEW_ALL
        )
        account = self.principal.account

        if account is None or (account.multi_branches and can_view_all):
            return {}
        if account.access_branches:
            return {"branch_id": list(account.access_branches)}
        if account.default_branch_id:
            return {"branch_id": account.default_branch_id}
        if can_view_all:
            return {}
        return {"branch_id": []}

    async def fetch_all_paginated(
        self,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        sort_by: Optional[str] = None,
    ) -> PaginatedResponse:
        """Get one page of records visible to the principal."""
        logger.info(f"get a collection of {self.event_entity}s by pagination")
        await self._authorize(PermissionAction.VIEW, self.errors.collection)

        page = settings.DEFAULT_PAGE if page is None else page
        per_page = settings.DEFAULT_PAGE_SIZE if per_page is None else per_page

        try:
            filters = await self._branch_scope() if self.branch_scoped else {}
            return await self.service.get_collection_paginated(
                filters, page=page, limit=per_page, sort_by=sort_by
            )
        except DATA_ERRORS as exc:
            raise self.errors.collection(str(exc)) from exc

    async def search(self, query: Mapping[str, str]) -> List[Any]:
        """Get every record matching the query-string filters."""
        logger.info(f"search {self.event_entity}s")
        await self._authorize(PermissionAction.VIEW, self.errors.search)

        if not query:
            raise self.errors.search("Search Query is missing")

        try:
            filters = self.service.search_filters(query)
            return await self.service.get_collection(filters)
        except DATA_ERRORS as exc:
            raise self.errors.search(str(exc)) from exc

    async def remove(self, record_id: UUID) -> Any:
        """Delete a single record."""
        logger.info(f"remove {self.event_entity}: {record_id}")
        await self._authorize(PermissionAction.DELETE, self.errors.remove)

        try:
            record = await self.service.delete({"id": record_id})
            if record is None:
                raise ValueError(f"{self.label} does not exist")

            await self._after_remove(record)
            await self._track(
                f"{self.event_entity}_delete",
                f"Delete Info for {self._describe(record)}",
            )
        except DATA_ERRORS as exc:
            raise self.errors.remove(str(exc)) from exc

        return record
