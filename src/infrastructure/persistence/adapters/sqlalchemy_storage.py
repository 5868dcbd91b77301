"""SQLAlchemy implementation of StorageAdapterProtocol.

Queries are SQLAlchemy Select statements over one mapped model, executed
on the unit of work's AsyncSession. The adapter is created per unit of work
and never outlives its session.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import Select, false, func, inspect, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from src.domain.value_objects.sort_key import SortKey

TModel = TypeVar("TModel")

TENANT_COLUMN = "tenant_id"


class SqlAlchemyStorageAdapter(Generic[TModel]):
    """Storage capabilities for one mapped model on one session.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Args:
        session: Session owned by the unit of work.
        model: Mapped model class (the aggregate type).

    Raises:
        TypeError: If the model has a composite primary key.
    """

    def __init__(self, session: AsyncSession, model: type[TModel]) -> None:
        self._session = session
        self._model = model
        self._mapper = inspect(model)

        primary_key = self._mapper.primary_key
        if len(primary_key) != 1:
            raise TypeError(f"{model.__name__} must have a single-column primary key")
        self.identity_field: str = self._mapper.get_property_by_column(
            primary_key[0]
        ).key
        self.supports_tenancy: bool = TENANT_COLUMN in self._mapper.column_attrs
        self.aggregate_name: str = model.__name__

    @property
    def session(self) -> AsyncSession:
        return self._session

    # Query building ---------------------------------------------------------

    def base_query(self) -> Select[Any]:
        return select(self._model)

    def where_id(self, query: Select[Any], entity_id: Any) -> Select[Any]:
        return query.where(self._column(self.identity_field) == entity_id)

    def where_tenant(self, query: Select[Any], tenant_id: UUID) -> Select[Any]:
        return query.where(self._column(TENANT_COLUMN) == tenant_id)

    def where_none(self, query: Select[Any]) -> Select[Any]:
        return query.where(false())

    def where_equals(
        self, query: Select[Any], criteria: Mapping[str, Any]
    ) -> Select[Any]:
        for name, value in criteria.items():
            column = self._column(name)
            query = query.where(column.is_(None) if value is None else column == value)
        return query

    def where_contains_any(
        self, query: Select[Any], fields: Sequence[str], term: str
    ) -> Select[Any]:
        lowered = term.lower()
        return query.where(
            or_(
                *(
                    func.lower(self._column(name)).contains(lowered, autoescape=True)
                    for name in fields
                )
            )
        )

    def order_by(self, query: Select[Any], keys: Sequence[SortKey]) -> Select[Any]:
        clauses = [
            self._column(key.field).desc()
            if key.descending
            else self._column(key.field).asc()
            for key in keys
        ]
        return query.order_by(None).order_by(*clauses)

    def slice(self, query: Select[Any], offset: int, limit: int | None) -> Select[Any]:
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return query

    # Execution --------------------------------------------------------------

    async def fetch_all(self, query: Select[Any]) -> list[TModel]:
        result = await self._session.execute(query)
        return list(result.scalars().unique().all())

    async def fetch_first(self, query: Select[Any]) -> TModel | None:
        result = await self._session.execute(query.limit(1))
        return result.scalars().unique().first()

    async def count(self, query: Select[Any]) -> int:
        subquery = query.order_by(None).subquery()
        total = await self._session.scalar(select(func.count()).select_from(subquery))
        return int(total or 0)

    # Staged writes ----------------------------------------------------------

    def insert(self, entity: TModel) -> None:
        self._session.add(entity)

    def update(self, entity: TModel) -> None:
        # Re-attaches detached instances; tracked ones are already pending.
        self._session.add(entity)

    async def delete(self, entity: TModel) -> None:
        await self._session.delete(entity)

    def _column(self, name: str) -> InstrumentedAttribute[Any]:
        if name not in self._mapper.column_attrs:
            raise AttributeError(
                f"{self.aggregate_name} has no column attribute '{name}'"
            )
        return getattr(self._model, name)
