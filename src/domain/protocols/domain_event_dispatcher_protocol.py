"""Domain event handler and dispatcher ports.

Handlers receive the unit of work that is committing, so anything they stage
(outbox rows, other aggregates) joins the same transaction.
"""

from collections.abc import Sequence
from typing import Protocol, TypeVar

from src.domain.events.domain_event import DomainEvent
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol

TEvent = TypeVar("TEvent", bound=DomainEvent, contravariant=True)


class DomainEventHandler(Protocol[TEvent]):
    """Reacts to one domain event type."""

    async def handle(self, event: TEvent, uow: UnitOfWorkProtocol) -> None:
        """Handle the event inside the committing unit of work."""
        ...


class DomainEventDispatcherProtocol(Protocol):
    """Routes collected domain events to their handlers."""

    async def dispatch(
        self, events: Sequence[DomainEvent], uow: UnitOfWorkProtocol
    ) -> None:
        """Run every handler of every event, in event order."""
        ...
