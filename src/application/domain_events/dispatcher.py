"""Domain event dispatcher.

Registry of domain event handlers keyed by event class. The unit of work
hands it the events its aggregates recorded, just before the database
commit; handlers run sequentially in event order so outbox rows they stage
keep that order.

Fail-open per handler: an exception is logged and the remaining handlers
still run. Cancellation propagates.
"""

from collections import defaultdict
from collections.abc import Sequence
from typing import Any

from src.domain.events.domain_event import DomainEvent
from src.domain.protocols.domain_event_dispatcher_protocol import DomainEventHandler
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol


class DomainEventDispatcher:
    """Dispatch domain events to every handler registered for their class.

    Only exact class matches are dispatched (no base-class handlers).

    Example:
        >>> dispatcher = DomainEventDispatcher(logger)
        >>> dispatcher.register(TaskCompleted, TaskCompletedToOutbox(logger))
        >>> uow_factory = SqlAlchemyUnitOfWorkFactory(
        ...     database, serializer, logger, domain_events=dispatcher
        ... )
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._handlers: dict[type[DomainEvent], list[DomainEventHandler[Any]]] = (
            defaultdict(list)
        )
        self._logger = logger

    def register(
        self, event_class: type[DomainEvent], handler: DomainEventHandler[Any]
    ) -> None:
        self._handlers[event_class].append(handler)

    def handlers_for(
        self, event_class: type[DomainEvent]
    ) -> tuple[DomainEventHandler[Any], ...]:
        return tuple(self._handlers.get(event_class, ()))

    async def dispatch(
        self, events: Sequence[DomainEvent], uow: UnitOfWorkProtocol
    ) -> None:
        if not events:
            return

        self._logger.debug("domain_events_dispatching", count=len(events))
        for event in events:
            await self._dispatch_one(event, uow)

    async def _dispatch_one(self, event: DomainEvent, uow: UnitOfWorkProtocol) -> None:
        handlers = self.handlers_for(type(event))
        log = self._logger.bind(
            event_type=event.event_name(), event_id=str(event.event_id)
        )
        if not handlers:
            log.warning("domain_event_unhandled")
            return

        for handler in handlers:
            try:
                await handler.handle(event, uow)
            except Exception as e:
                log.error(
                    "domain_event_handler_failed",
                    error=e,
                    handler=type(handler).__name__,
                )
