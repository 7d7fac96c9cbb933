"""
Base service classes.
Services contain data-access logic and coordinate repositories.
"""

from abc import ABC
import math
from typing import Any, Dict, FrozenSet, Generic, List, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from geomonitor.core.logging import get_logger
from geomonitor.db.repositories.base_repository import BaseRepository
from geomonitor.schemas.pagination import PaginatedResponse

ResponseType = TypeVar("ResponseType", bound=BaseModel)

logger = get_logger(__name__)


class BaseService(ABC):
    """Base service class for all services."""
    pass


class EntityService(BaseService, Generic[ResponseType]):
    """
    Create/get/update/delete/list/paginate over one repository.

    Every read goes through the repository's population and is returned
    as ``response_schema``, the entity's public projection. Missing
    records yield ``None``, never an exception.
    """

    response_schema: Type[ResponseType]
    searchable_fields: FrozenSet[str] = frozenset()
    entity_name: str = "record"

    def __init__(self, session: AsyncSession, repository: BaseRepository):
        self.session = session
        self.repo = repository

    def _to_response(self, instance) -> ResponseType:
        return self.response_schema.model_validate(instance)

    async def create(self, data: BaseModel) -> ResponseType:
        """
        Persist a new record and return it projected.

        Raises:
            PersistenceError: On constraint violation
        """
        logger.info(f"Creating {self.entity_name}")
        instance = await self.repo.create(**data.model_dump(exclude_unset=True))
        return await self.get(id=instance.id)

    async def get(self, **filters) -> Optional[ResponseType]:
        """Get at most one record matching filters."""
        instance = await self.repo.get_one(**filters)
        if instance is None:
            return None
        return self._to_response(instance)

    async def get_collection(self, filters: Optional[Mapping[str, Any]] = None) -> List[ResponseType]:
        """Get all records matching filters."""
        instances = await self.repo.list(**(filters or {}))
        return [self._to_response(instance) for instance in instances]

    async def get_collection_paginated(
        self,
        filters: Optional[Mapping[str, Any]],
        page: int,
        limit: int,
        sort_by: Optional[str] = None,
    ) -> PaginatedResponse[ResponseType]:
        """
        Get one page of records sorted descending by ``sort_by``
        (``created_at`` when not given).

        Raises:
            ValueError: On non-positive page/limit or unknown sort field
        """
        if page < 1 or limit < 1:
            raise ValueError("page and per_page must be positive integers")

        instances, total = await self.repo.paginate(
            filters, page=page, limit=limit, sort_by=sort_by or "created_at"
        )
        return PaginatedResponse[self.response_schema](
            total_pages=math.ceil(total / limit),
            total_docs_count=total,
            current_page=page,
            docs=[self._to_response(instance) for instance in instances],
        )

    async def update(self, filters: Mapping[str, Any], data: BaseModel) -> Optional[ResponseType]:
        """
        Merge the fields set on ``data`` into the matching record.
        Fields explicitly set to null are cleared.

        Raises:
            PersistenceError: On constraint violation
        """
        instance = await self.repo.get_one(**filters)
        if instance is None:
            return None

        changes: Dict[str, Any] = data.model_dump(exclude_unset=True)
        logger.info(
            f"Updating {self.entity_name}",
            extra={"id": str(instance.id), "fields": sorted(changes)},
        )
        await self.repo.update(instance.id, **changes)
        return await self.get(id=instance.id)

    async def delete(self, filters: Mapping[str, Any]) -> Optional[ResponseType]:
        """
        Remove the matching record and return its pre-deletion projection.

        Raises:
            PersistenceError: When other records still reference it
        """
        instance = await self.repo.get_one(**filters)
        if instance is None:
            return None

        removed = self._to_response(instance)
        await self.repo.delete(instance)
        logger.info(f"Deleted {self.entity_name}", extra={"id": str(removed.id)})
        return removed

    def search_filters(self, query: Mapping[str, str]) -> Dict[str, Any]:
        """
        Turn query-string parameters into repository filters.

        Raises:
            ValueError: On fields that are not searchable or values that do not parse
        """
        unknown = sorted(set(query) - self.searchable_fields)
        if unknown:
            raise ValueError(f"Unsupported search fields: {', '.join(unknown)}")
        return self.repo.coerce_filters(query)
