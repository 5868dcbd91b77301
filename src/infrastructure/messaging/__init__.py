"""Messaging infrastructure: wire codec, broker, outbox, deduplication.

Usage:
    from src.infrastructure.messaging import InMemoryMessageBroker, OutboxProcessor
"""

from src.infrastructure.messaging.in_memory_broker import (
    InMemoryMessageBroker,
    PublishedMessage,
)
from src.infrastructure.messaging.outbox_processor import (
    OutboxBatchResult,
    OutboxProcessor,
)
from src.infrastructure.messaging.processed_event_store import (
    InMemoryProcessedEventStore,
)
from src.infrastructure.messaging.serialization import JsonIntegrationEventSerializer

__all__ = [
    "InMemoryMessageBroker",
    "InMemoryProcessedEventStore",
    "JsonIntegrationEventSerializer",
    "OutboxBatchResult",
    "OutboxProcessor",
    "PublishedMessage",
]
