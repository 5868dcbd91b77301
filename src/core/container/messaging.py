"""Messaging dependency factories.

Application-scoped singletons for integration event publishing and
consumption. The in-memory broker is the only transport shipped here;
a networked broker adapter plugs in behind get_message_broker().
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.core.container.infrastructure import (
    get_database,
    get_integration_event_serializer,
    get_logger,
)

if TYPE_CHECKING:
    from src.application.integration_events import (
        IntegrationEventConsumer,
        IntegrationEventPublisher,
    )
    from src.domain.protocols.message_publisher_protocol import (
        MessagePublisherProtocol,
    )
    from src.domain.protocols.processed_event_store_protocol import (
        ProcessedEventStoreProtocol,
    )
    from src.infrastructure.messaging.outbox_processor import OutboxProcessor


@lru_cache()
def get_message_broker() -> "MessagePublisherProtocol":
    """Get message broker singleton (app-scoped)."""
    from src.infrastructure.messaging.in_memory_broker import InMemoryMessageBroker

    return InMemoryMessageBroker(logger=get_logger(), exchange=settings.message_exchange)


@lru_cache()
def get_integration_event_publisher() -> "IntegrationEventPublisher":
    """Get integration event publisher singleton (app-scoped).

    Usage:
        publisher = get_integration_event_publisher()
        await publisher.publish(TaskCreated(task_id=task.id, title=task.title))
    """
    from src.application.integration_events import IntegrationEventPublisher

    return IntegrationEventPublisher(
        publisher=get_message_broker(),
        serializer=get_integration_event_serializer(),
        logger=get_logger(),
    )


@lru_cache()
def get_processed_event_store() -> "ProcessedEventStoreProtocol":
    """Get processed event store singleton (app-scoped)."""
    from src.infrastructure.messaging.processed_event_store import (
        InMemoryProcessedEventStore,
    )

    return InMemoryProcessedEventStore(retention=settings.processed_event_retention)


def create_integration_event_consumer(name: str) -> "IntegrationEventConsumer":
    """Build a consumer sharing the app's codec and deduplication store.

    Not cached: each consuming service creates its own named consumer and
    subscribes its handlers before attaching it to the broker.
    """
    from src.application.integration_events import IntegrationEventConsumer

    return IntegrationEventConsumer(
        name=name,
        serializer=get_integration_event_serializer(),
        processed_events=get_processed_event_store(),
        logger=get_logger(),
    )


@lru_cache()
def get_outbox_processor() -> "OutboxProcessor":
    """Get outbox processor singleton (app-scoped)."""
    from src.infrastructure.messaging.outbox_processor import OutboxProcessor

    return OutboxProcessor(
        session_factory=get_database().session_factory,
        publisher=get_message_broker(),
        serializer=get_integration_event_serializer(),
        logger=get_logger(),
        batch_size=settings.outbox_batch_size,
        max_retries=settings.outbox_max_retries,
        interval_seconds=settings.outbox_interval_seconds,
    )
