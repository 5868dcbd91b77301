"""Generic read/write repository protocols (ports).

Every operation takes the caller's RequestContext as its first argument.
Repositories scope by tenant from that context: a non-elevated caller only
ever sees rows of its own tenant, and rows of other tenants are reported
as absent rather than forbidden.

Writes are staged. Nothing is persisted until the owning unit of work
commits.
"""

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar

from src.domain.value_objects.filter import Filter
from src.domain.value_objects.paged_list import PagedList
from src.domain.value_objects.request_context import RequestContext

TAggregate = TypeVar("TAggregate")
TId = TypeVar("TId", contravariant=True)


class ReadRepositoryProtocol(Protocol[TAggregate, TId]):
    """Protocol for tenant-scoped reads of one aggregate type."""

    async def get_by_id(self, ctx: RequestContext, entity_id: TId) -> TAggregate | None:
        """Load one aggregate in its configured shape.

        Returns:
            The aggregate, or None when absent or owned by another tenant.
        """
        ...

    async def get_paged(
        self, ctx: RequestContext, filter: Filter
    ) -> PagedList[TAggregate]:
        """Search, sort and page the caller's aggregates.

        Raises:
            InvalidSortFieldError: If filter.sort_field is not a public sort field.
        """
        ...

    async def get_all(self, ctx: RequestContext, **criteria: Any) -> list[TAggregate]:
        """Return every visible aggregate matching equality criteria."""
        ...

    async def get_first(
        self, ctx: RequestContext, **criteria: Any
    ) -> TAggregate | None:
        """Return the first visible aggregate matching equality criteria."""
        ...

    async def exists(self, ctx: RequestContext, **criteria: Any) -> bool:
        """Check whether any visible aggregate matches equality criteria."""
        ...

    async def export(self, ctx: RequestContext, filter: Filter) -> list[TAggregate]:
        """Search and sort without paging, capped at the export limit."""
        ...


class WriteRepositoryProtocol(Protocol[TAggregate, TId]):
    """Protocol for staged, tenant-checked writes of one aggregate type."""

    async def get_by_id(self, ctx: RequestContext, entity_id: TId) -> TAggregate | None:
        """Load a tracked aggregate for modification (None when not visible)."""
        ...

    async def add(self, ctx: RequestContext, entity: TAggregate) -> TAggregate:
        """Stage a new aggregate, stamping the caller's tenant when unset.

        Raises:
            TenantAccessError: If the aggregate belongs to another tenant.
        """
        ...

    async def add_range(
        self, ctx: RequestContext, entities: Sequence[TAggregate]
    ) -> list[TAggregate]:
        """Stage several new aggregates."""
        ...

    async def update(self, ctx: RequestContext, entity: TAggregate) -> None:
        """Stage changes to an aggregate."""
        ...

    async def delete(self, ctx: RequestContext, entity: TAggregate) -> None:
        """Stage removal of an aggregate."""
        ...
