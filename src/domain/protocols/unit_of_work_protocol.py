"""UnitOfWorkProtocol definition (port).

One unit of work spans one request. Repositories obtained from it share its
transaction and stage writes; commit() makes all of them durable and
visible at once, or none of them. Leaving the async context without
committing discards staged work.

Usage:
    async with uow_factory(ctx) as uow:
        tasks = uow.write_repository(TaskModel)
        await tasks.add(ctx, task)
        uow.outbox.add(TaskCreated(task_id=task.id, title=task.title))
        result = await uow.commit()
"""

from collections.abc import Callable
from types import TracebackType
from typing import Any, Protocol, Self, TypeVar

from src.core.errors import DomainError
from src.core.result import Result
from src.domain.protocols.entity_query_configuration import EntityQueryConfiguration
from src.domain.protocols.outbox_repository_protocol import OutboxRepositoryProtocol
from src.domain.protocols.repository_protocols import (
    ReadRepositoryProtocol,
    WriteRepositoryProtocol,
)
from src.domain.specifications.specification import Specification
from src.domain.value_objects.request_context import RequestContext

TAggregate = TypeVar("TAggregate")


class UnitOfWorkProtocol(Protocol):
    """Protocol for atomic commit boundaries."""

    def read_repository(
        self,
        aggregate_type: type[TAggregate],
        *,
        query_configuration: EntityQueryConfiguration[Any] | None = None,
        specification: Specification[Any] | None = None,
    ) -> ReadRepositoryProtocol[TAggregate, Any]:
        """Read repository for an aggregate, sharing this unit's transaction."""
        ...

    def write_repository(
        self,
        aggregate_type: type[TAggregate],
        *,
        query_configuration: EntityQueryConfiguration[Any] | None = None,
    ) -> WriteRepositoryProtocol[TAggregate, Any]:
        """Write repository for an aggregate, staging into this unit."""
        ...

    @property
    def outbox(self) -> OutboxRepositoryProtocol:
        """Outbox staging integration events into this unit."""
        ...

    async def commit(self) -> Result[int, DomainError]:
        """Persist every staged write atomically.

        Returns:
            Success(number of affected records), or Failure(ConflictError)
            for uniqueness violations and Failure(ValidationError) for other
            constraint violations. Nothing is persisted on failure.
        """
        ...

    async def rollback(self) -> None:
        """Discard every staged write."""
        ...

    async def close(self) -> None:
        """Release held resources, discarding uncommitted work."""
        ...

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...


UnitOfWorkFactory = Callable[[RequestContext], UnitOfWorkProtocol]
"""Builds a fresh unit of work for one request's caller context."""
