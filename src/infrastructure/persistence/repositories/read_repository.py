"""Generic tenant-scoped read repository.

Composes a storage adapter with the aggregate's query configuration and
specification. Every read runs the same pipeline:

    tenant scope -> criteria -> search -> (count) -> load shape -> sort -> page

Tenant scoping comes first, so search, counts and pages never see another
tenant's rows. Ordering always ends with the primary key, so a fixed filter
over unchanged data yields identical pages on every call.

Reference:
    - src/domain/protocols/repository_protocols.py
"""

from typing import Any, Generic, TypeVar

from src.core.config import Settings, get_settings
from src.core.constants import SORT_ASCENDING, SORT_DESCENDING
from src.domain.protocols.entity_query_configuration import (
    EntityQueryConfiguration,
    NoRelatedData,
)
from src.domain.protocols.storage_adapter_protocol import StorageAdapterProtocol
from src.domain.specifications import Specification
from src.domain.value_objects.filter import Filter
from src.domain.value_objects.paged_list import PagedList
from src.domain.value_objects.request_context import RequestContext
from src.domain.value_objects.sort_key import SortKey

TAggregate = TypeVar("TAggregate")
TQuery = TypeVar("TQuery")


def scope_to_tenant(
    storage: StorageAdapterProtocol[Any, TQuery], query: TQuery, ctx: RequestContext
) -> TQuery:
    """Restrict a query to the rows the caller may see.

    Elevated callers see every tenant. A non-elevated caller without a
    tenant sees no rows of a multi-tenant aggregate.
    """
    if not storage.supports_tenancy or ctx.is_elevated:
        return query
    if ctx.tenant_id is None:
        return storage.where_none(query)
    return storage.where_tenant(query, ctx.tenant_id)


class ReadRepository(Generic[TAggregate, TQuery]):
    """Read repository over any storage adapter.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Args:
        storage: Storage adapter bound to the unit of work.
        query_configuration: Load shape of the aggregate.
        specification: Search/sort declarations of the aggregate.
        settings: Page size and export limits (process settings by default).

    Example:
        >>> repo = uow.read_repository(
        ...     TaskModel,
        ...     query_configuration=TaskQueryConfiguration(),
        ...     specification=TaskSpecification(),
        ... )
        >>> page = await repo.get_paged(ctx, TaskFilter(search_by="report"))
    """

    def __init__(
        self,
        storage: StorageAdapterProtocol[TAggregate, TQuery],
        *,
        query_configuration: EntityQueryConfiguration[TQuery] | None = None,
        specification: Specification[Any] | None = None,
        settings: Settings | None = None,
    ) -> None:
        config = settings or get_settings()
        self._storage = storage
        self._query_configuration = query_configuration or NoRelatedData()
        self._specification = specification or Specification()
        self._max_page_size = config.max_page_size
        self._max_export_size = config.max_export_size

    async def get_by_id(
        self, ctx: RequestContext, entity_id: Any
    ) -> TAggregate | None:
        """Load one aggregate in its configured shape.

        Returns:
            The aggregate, or None when absent or owned by another tenant.
        """
        query = self._storage.where_id(self._scoped(ctx), entity_id)
        return await self._storage.fetch_first(self._configured(query))

    async def get_paged(
        self, ctx: RequestContext, filter: Filter
    ) -> PagedList[TAggregate]:
        """Search, sort and page the caller's aggregates.

        The effective page size is clamped to max_page_size when one is
        configured.

        Raises:
            InvalidSortFieldError: If filter.sort_field is not a public sort field.
        """
        ordering = self._ordering(filter)
        page_size = self._effective_page_size(filter.page_size)
        query = self._filtered(self._scoped(ctx), filter)

        total_count = await self._storage.count(query)
        offset = (filter.page_number - 1) * page_size
        items: list[TAggregate] = []
        if offset < total_count:
            paged = self._storage.slice(
                self._storage.order_by(self._configured(query), ordering),
                offset,
                page_size,
            )
            items = await self._storage.fetch_all(paged)

        return PagedList(
            items=items,
            # Rows inserted between count and fetch must not break the page invariant.
            total_count=max(total_count, offset + len(items)) if items else total_count,
            page_number=filter.page_number,
            page_size=page_size,
            sort_field=filter.sort_field or None,
            sort_direction=self._applied_direction(filter),
        )

    async def get_all(self, ctx: RequestContext, **criteria: Any) -> list[TAggregate]:
        """Return every visible aggregate matching equality criteria, by id."""
        query = self._storage.order_by(
            self._configured(self._matching(ctx, criteria)), [self._identity_key()]
        )
        return await self._storage.fetch_all(query)

    async def get_first(
        self, ctx: RequestContext, **criteria: Any
    ) -> TAggregate | None:
        """Return the first visible aggregate (by id) matching equality criteria."""
        query = self._storage.order_by(
            self._configured(self._matching(ctx, criteria)), [self._identity_key()]
        )
        return await self._storage.fetch_first(query)

    async def exists(self, ctx: RequestContext, **criteria: Any) -> bool:
        return await self._storage.count(self._matching(ctx, criteria)) > 0

    async def export(self, ctx: RequestContext, filter: Filter) -> list[TAggregate]:
        """Search and sort without paging, capped at max_export_size rows.

        Raises:
            InvalidSortFieldError: If filter.sort_field is not a public sort field.
        """
        ordering = self._ordering(filter)
        query = self._storage.order_by(
            self._configured(self._filtered(self._scoped(ctx), filter)), ordering
        )
        return await self._storage.fetch_all(
            self._storage.slice(query, 0, self._max_export_size)
        )

    # Pipeline stages ----------------------------------------------------------

    def _scoped(self, ctx: RequestContext) -> TQuery:
        return scope_to_tenant(self._storage, self._storage.base_query(), ctx)

    def _matching(self, ctx: RequestContext, criteria: dict[str, Any]) -> TQuery:
        query = self._scoped(ctx)
        if criteria:
            query = self._storage.where_equals(query, criteria)
        return query

    def _filtered(self, query: TQuery, filter: Filter) -> TQuery:
        criteria = self._specification.criteria(filter)
        if criteria:
            query = self._storage.where_equals(query, criteria)
        if filter.search_by and self._specification.search_fields:
            query = self._storage.where_contains_any(
                query, self._specification.search_fields, filter.search_by
            )
        return query

    def _configured(self, query: TQuery) -> TQuery:
        return self._query_configuration.configure_aggregate(query)

    def _ordering(self, filter: Filter) -> list[SortKey]:
        keys = self._specification.ordering(filter)
        if all(key.field != self._storage.identity_field for key in keys):
            keys.append(self._identity_key())
        return keys

    def _identity_key(self) -> SortKey:
        return SortKey(self._storage.identity_field)

    def _effective_page_size(self, requested: int) -> int:
        if self._max_page_size is not None:
            return min(requested, self._max_page_size)
        return requested

    @staticmethod
    def _applied_direction(filter: Filter) -> str | None:
        if not filter.sort_field:
            return None
        return SORT_DESCENDING if filter.is_descending else SORT_ASCENDING
