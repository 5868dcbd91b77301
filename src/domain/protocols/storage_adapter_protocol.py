"""StorageAdapterProtocol definition (port).

The generic read/write repositories hold all paging, search, sorting and
tenant scoping logic. They reach the storage engine only through this
narrow capability set, so a new engine means a new adapter and nothing
else.

Query values (TQuery) are opaque to the repositories: they are built by
the adapter, threaded through its methods, and handed back to it for
execution. Every query-building method returns a new query.

Implementations:
    - SqlAlchemyStorageAdapter: src/infrastructure/persistence/adapters/sqlalchemy_storage.py
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, TypeVar
from uuid import UUID

from src.domain.value_objects.sort_key import SortKey

TAggregate = TypeVar("TAggregate")
TQuery = TypeVar("TQuery")


class StorageAdapterProtocol(Protocol[TAggregate, TQuery]):
    """Capabilities a storage engine offers to the generic repositories.

    Attributes:
        identity_field: Primary key attribute, used as the final ordering
            tie-breaker.
        supports_tenancy: True when the aggregate has a tenant_id column.
        aggregate_name: Aggregate name for logs and error messages.
    """

    identity_field: str
    supports_tenancy: bool
    aggregate_name: str

    # Query building ---------------------------------------------------------

    def base_query(self) -> TQuery:
        """Query selecting every row of the aggregate."""
        ...

    def where_id(self, query: TQuery, entity_id: Any) -> TQuery:
        """Restrict to the row with this primary key."""
        ...

    def where_tenant(self, query: TQuery, tenant_id: UUID) -> TQuery:
        """Restrict to rows owned by tenant_id."""
        ...

    def where_none(self, query: TQuery) -> TQuery:
        """Restrict to no rows at all."""
        ...

    def where_equals(self, query: TQuery, criteria: Mapping[str, Any]) -> TQuery:
        """Restrict to rows whose attributes equal the given values.

        Raises:
            AttributeError: If a criterion names an unknown attribute.
        """
        ...

    def where_contains_any(
        self, query: TQuery, fields: Sequence[str], term: str
    ) -> TQuery:
        """Restrict to rows where any field contains term (case-insensitive)."""
        ...

    def order_by(self, query: TQuery, keys: Sequence[SortKey]) -> TQuery:
        """Replace the query's ordering with keys, in order."""
        ...

    def slice(self, query: TQuery, offset: int, limit: int | None) -> TQuery:
        """Skip offset rows and keep at most limit (None keeps all)."""
        ...

    # Execution --------------------------------------------------------------

    async def fetch_all(self, query: TQuery) -> list[TAggregate]:
        """Execute the query and return every row."""
        ...

    async def fetch_first(self, query: TQuery) -> TAggregate | None:
        """Execute the query and return the first row, if any."""
        ...

    async def count(self, query: TQuery) -> int:
        """Count the rows the query matches (ignoring ordering and slicing)."""
        ...

    # Staged writes ----------------------------------------------------------

    def insert(self, entity: TAggregate) -> None:
        """Stage a new row."""
        ...

    def update(self, entity: TAggregate) -> None:
        """Stage changes to an existing row."""
        ...

    async def delete(self, entity: TAggregate) -> None:
        """Stage removal of a row."""
        ...
