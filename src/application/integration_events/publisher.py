"""Integration event publisher service.

Command handlers call this after a successful commit. The event is a fact
that already happened, so a failed publish never rolls anything back and
never changes the command's Result: it is logged on the error channel and
reported through the return value for callers that want to react (for
example by relying on the outbox instead).

Usage:
    committed = await self.commit(uow)
    if is_failure(committed):
        return committed
    await self._events.publish(TaskCreated(task_id=task.id, title=task.title))
    return self.created(task.id)
"""

from collections.abc import Iterable

from src.domain.events.integration_event import IntegrationEvent
from src.domain.protocols.integration_event_serializer_protocol import (
    IntegrationEventSerializerProtocol,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.message_publisher_protocol import MessagePublisherProtocol


class IntegrationEventPublisher:
    """Serialize integration events and hand them to the broker.

    Args:
        publisher: Broker publisher (routing key = event name).
        serializer: Wire codec.
        logger: Logger for publish outcomes.
    """

    def __init__(
        self,
        publisher: MessagePublisherProtocol,
        serializer: IntegrationEventSerializerProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._publisher = publisher
        self._serializer = serializer
        self._logger = logger

    async def publish(self, event: IntegrationEvent) -> bool:
        """Publish one event.

        Cancellation propagates; every other failure is logged and swallowed.

        Returns:
            True when the broker accepted the message, False otherwise.
        """
        try:
            message = self._serializer.serialize(event)
            await self._publisher.publish(event.event_type, message)
        except Exception as e:
            self._logger.error(
                "integration_event_publish_failed",
                error=e,
                event_type=event.event_type,
                event_id=str(event.event_id),
            )
            return False

        self._logger.info(
            "integration_event_published",
            event_type=event.event_type,
            event_id=str(event.event_id),
        )
        return True

    async def publish_all(self, events: Iterable[IntegrationEvent]) -> int:
        """Publish events in order, continuing past failures.

        Returns:
            Number of events the broker accepted.
        """
        published = 0
        for event in events:
            if await self.publish(event):
                published += 1
        return published
