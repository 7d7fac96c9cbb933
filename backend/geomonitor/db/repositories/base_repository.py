"""
Base repository class with common CRUD operations.
Repositories handle database access using async SQLAlchemy sessions.
"""

from datetime import date, datetime, timezone
from typing import Any, Dict, Generic, List, Mapping, Optional, Sequence, Tuple, Type, TypeVar
import uuid

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from geomonitor.core.exceptions import PersistenceError
from geomonitor.core.logging import get_logger
from geomonitor.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)

logger = get_logger(__name__)


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Filters are column-equality maps; a list, tuple or set value matches
    by membership and ``None`` matches NULL. Relationships named in
    ``population`` are eagerly loaded on every read.
    """

    population: Sequence[str] = ()

    def __init__(self, model: Type[ModelType], session: AsyncSession):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            session: Async database session
        """
        self.model = model
        self.session = session

    @property
    def columns(self):
        return self.model.__table__.columns

    def _select(self):
        query = select(self.model).execution_options(populate_existing=True)
        if self.population:
            query = query.options(
                *[selectinload(getattr(self.model, name)) for name in self.population]
            )
        return query

    def _where(self, query, filters: Optional[Mapping[str, Any]]):
        for key, value in (filters or {}).items():
            if key not in self.columns:
                raise ValueError(f"Unknown field: {key}")
            column = getattr(self.model, key)
            if isinstance(value, (list, tuple, set, frozenset)):
                query = query.where(column.in_(list(value)))
            elif value is None:
                query = query.where(column.is_(None))
            else:
                query = query.where(column == value)
        return query

    def _has_timestamps(self) -> bool:
        return "created_at" in self.columns and "updated_at" in self.columns

    def coerce_filters(self, raw: Mapping[str, str]) -> Dict[str, Any]:
        """
        Convert string filter values (e.g. from a query string) to column types.

        Raises:
            ValueError: On unknown fields or values that do not parse
        """
        coerced: Dict[str, Any] = {}
        for key, value in raw.items():
            if key not in self.columns:
                raise ValueError(f"Unknown field: {key}")
            python_type = self.columns[key].type.python_type
            if python_type is uuid.UUID:
                coerced[key] = uuid.UUID(str(value))
            elif python_type is datetime:
                coerced[key] = datetime.fromisoformat(value)
            elif python_type is date:
                coerced[key] = date.fromisoformat(value)
            elif python_type is bool:
                coerced[key] = str(value).lower() in ("true", "1", "yes")
            else:
                coerced[key] = value
        return coerced

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as exc:
            logger.warning(
                "Constraint violation",
                extra={"table": self.model.__tablename__, "error": str(exc.orig)},
            )
            raise PersistenceError(f"{self.model.__name__} violates a storage constraint") from exc

    async def create(self, **kwargs) -> ModelType:
        """
        Create a new record. Timestamps are always server-assigned.

        Raises:
            PersistenceError: On constraint violation
        """
        if self._has_timestamps():
            now = utcnow()
            kwargs["created_at"] = now
            kwargs["updated_at"] = now
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self._flush()
        await self.session.refresh(instance)
        return instance

    async def get(self, id: uuid.UUID) -> Optional[ModelType]:
        """Get a record by ID."""
        return await self.get_one(id=id)

    async def get_one(self, **filters) -> Optional[ModelType]:
        """Get the first record matching filters, or None."""
        query = self._where(self._select(), filters).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def list(self, **filters) -> List[ModelType]:
        """List all records matching filters in storage order."""
        result = await self.session.execute(self._where(self._select(), filters))
        return list(result.scalars().all())

    async def count(self, **filters) -> int:
        """Count records matching filters."""
        query = self._where(select(func.count()).select_from(self.model), filters)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def paginate(
        self,
        filters: Optional[Mapping[str, Any]],
        page: int,
        limit: int,
        sort_by: str = "created_at",
    ) -> Tuple[List[ModelType], int]:
        """
        Fetch one page of records sorted descending by ``sort_by``.

        Returns:
            Tuple of (records on the page, total matching records)
        """
        if sort_by not in self.columns:
            raise ValueError(f"Cannot sort by unknown field: {sort_by}")

        total = await self.count(**(filters or {}))
        query = (
            self._where(self._select(), filters)
            .order_by(getattr(self.model, sort_by).desc(), self.model.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def update(self, id: uuid.UUID, **kwargs) -> Optional[ModelType]:
        """
        Merge the given attributes into a record.

        Raises:
            PersistenceError: On constraint violation
        """
        instance = await self.session.get(self.model, id)
        if instance is None:
            return None
        for key, value in kwargs.items():
            if key not in self.columns or key in ("id", "created_at", "updated_at"):
                raise ValueError(f"Field cannot be updated: {key}")
            setattr(instance, key, value)
        if self._has_timestamps():
            instance.updated_at = utcnow()
        await self._flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, instance: ModelType) -> None:
        """
        Delete a loaded record.

        Raises:
            PersistenceError: When other records still reference it
        """
        await self.session.delete(instance)
        await self._flush()
