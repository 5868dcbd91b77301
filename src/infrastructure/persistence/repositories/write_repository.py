"""Generic tenant-checked write repository.

Writes are staged on the unit of work's session and persisted only when
the unit of work commits. Tenant rules:

- add() stamps the caller's tenant on a multi-tenant aggregate without one
- writes to another tenant's aggregate raise TenantAccessError
- a non-elevated caller without a tenant cannot write multi-tenant aggregates
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from src.domain.errors import TenantAccessError
from src.domain.protocols.entity_protocols import MultiTenantEntity
from src.domain.protocols.entity_query_configuration import (
    EntityQueryConfiguration,
    NoRelatedData,
)
from src.domain.protocols.storage_adapter_protocol import StorageAdapterProtocol
from src.domain.value_objects.request_context import RequestContext
from src.infrastructure.persistence.repositories.read_repository import scope_to_tenant

TAggregate = TypeVar("TAggregate")
TQuery = TypeVar("TQuery")


class WriteRepository(Generic[TAggregate, TQuery]):
    """Write repository over any storage adapter.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Args:
        storage: Storage adapter bound to the unit of work.
        query_configuration: Load shape used by the tracked get_by_id().
    """

    def __init__(
        self,
        storage: StorageAdapterProtocol[TAggregate, TQuery],
        *,
        query_configuration: EntityQueryConfiguration[TQuery] | None = None,
    ) -> None:
        self._storage = storage
        self._query_configuration = query_configuration or NoRelatedData()

    async def get_by_id(
        self, ctx: RequestContext, entity_id: Any
    ) -> TAggregate | None:
        """Load a tracked aggregate for modification.

        Returns:
            The aggregate, or None when absent or owned by another tenant.
        """
        query = self._storage.where_id(
            scope_to_tenant(self._storage, self._storage.base_query(), ctx), entity_id
        )
        return await self._storage.fetch_first(
            self._query_configuration.configure_aggregate(query)
        )

    async def add(self, ctx: RequestContext, entity: TAggregate) -> TAggregate:
        """Stage a new aggregate.

        Raises:
            TenantAccessError: If the aggregate belongs to another tenant.
        """
        self._claim(ctx, entity)
        self._storage.insert(entity)
        return entity

    async def add_range(
        self, ctx: RequestContext, entities: Sequence[TAggregate]
    ) -> list[TAggregate]:
        """Stage several new aggregates; nothing is staged if any is rejected."""
        for entity in entities:
            self._claim(ctx, entity)
        for entity in entities:
            self._storage.insert(entity)
        return list(entities)

    async def update(self, ctx: RequestContext, entity: TAggregate) -> None:
        self._check_access(ctx, entity)
        self._storage.update(entity)

    async def delete(self, ctx: RequestContext, entity: TAggregate) -> None:
        self._check_access(ctx, entity)
        await self._storage.delete(entity)

    def _claim(self, ctx: RequestContext, entity: TAggregate) -> None:
        if not isinstance(entity, MultiTenantEntity):
            return
        if entity.tenant_id is None and ctx.tenant_id is not None:
            entity.tenant_id = ctx.tenant_id
            return
        self._check_access(ctx, entity)

    def _check_access(self, ctx: RequestContext, entity: TAggregate) -> None:
        if isinstance(entity, MultiTenantEntity) and not ctx.can_access_tenant(
            entity.tenant_id
        ):
            raise TenantAccessError(self._storage.aggregate_name, entity.tenant_id)
