"""EntityQueryConfiguration protocol (port).

A per-aggregate strategy that declares which related data every read of
the aggregate eagerly loads. Both read paths (get by id, get paged) and the
write repository's tracked load run the same configuration, so an
aggregate has one shape no matter how it was fetched.

Rules for implementations:
    - Pure: no I/O, no mutation of the incoming query.
    - Idempotent: configuring an already configured query must not add
      duplicate loads or change result cardinality.

Usage:
    >>> class TaskQueryConfiguration:
    ...     def configure_aggregate(self, query: Select) -> Select:
    ...         return query.options(selectinload(TaskModel.tags))
"""

from typing import Protocol, TypeVar

TQuery = TypeVar("TQuery")


class EntityQueryConfiguration(Protocol[TQuery]):
    """Protocol for aggregate load-shape strategies."""

    def configure_aggregate(self, query: TQuery) -> TQuery:
        """Return the query augmented with the aggregate's related data.

        Args:
            query: Base query over the aggregate.

        Returns:
            New query that eagerly loads the aggregate's related data.
        """
        ...


class NoRelatedData:
    """Configuration for aggregates without related data."""

    def configure_aggregate(self, query: TQuery) -> TQuery:
        return query
