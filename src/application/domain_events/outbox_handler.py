"""Base handler turning a domain event into an outbox integration event."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from src.domain.events.domain_event import DomainEvent
from src.domain.events.integration_event import IntegrationEvent
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.unit_of_work_protocol import UnitOfWorkProtocol

TEvent = TypeVar("TEvent", bound=DomainEvent)


class DomainEventToOutboxHandler(ABC, Generic[TEvent]):
    """Stage the integration event mapped from a domain event.

    The row goes into the committing unit's outbox, so it is persisted only
    if the state change is.

    Example:
        >>> class TaskCompletedToOutbox(DomainEventToOutboxHandler[TaskCompleted]):
        ...     def to_integration_event(self, event):
        ...         return TaskClosed(task_id=event.task_id)
    """

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    @abstractmethod
    def to_integration_event(self, event: TEvent) -> IntegrationEvent:
        """Map the domain event to its primitive-only wire counterpart."""

    async def handle(self, event: TEvent, uow: UnitOfWorkProtocol) -> None:
        integration_event = self.to_integration_event(event)
        uow.outbox.add(integration_event)
        self._logger.debug(
            "domain_event_staged_in_outbox",
            domain_event=event.event_name(),
            event_type=integration_event.event_type,
            event_id=str(integration_event.event_id),
        )
