"""Integration event consumer service.

The inbound side of the messaging seam. A consuming service registers one
handler per event type it cares about; the broker delivers raw messages by
routing key and the consumer:

1. Skips event types it has no handler for
2. Deserializes the message into the registered event class
3. Skips event ids it already processed (at-least-once delivery)
4. Runs the handler, then records the event id as processed

Deliveries of the same event id are serialized per consumer: a duplicate
that arrives while the first is still being handled waits for it, then
sees the id as processed.

Handler failures propagate so the broker can redeliver; the event id is
not recorded in that case.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any
from uuid import UUID

from src.domain.events.integration_event import IntegrationEvent
from src.domain.protocols.integration_event_handler_protocol import (
    IntegrationEventHandler,
)
from src.domain.protocols.integration_event_serializer_protocol import (
    IntegrationEventSerializerProtocol,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.processed_event_store_protocol import (
    ProcessedEventStoreProtocol,
)


@dataclass(frozen=True, slots=True)
class _Subscription:
    event_class: type[IntegrationEvent]
    handler: IntegrationEventHandler[Any]


@dataclass(slots=True)
class _Claim:
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    holders: int = 0


class IntegrationEventConsumer:
    """Route delivered messages to this service's event handlers.

    Args:
        name: Consumer name; deduplication is tracked per consumer.
        serializer: Wire codec.
        processed_events: Store of handled event ids.
        logger: Logger for delivery outcomes.
    """

    def __init__(
        self,
        name: str,
        serializer: IntegrationEventSerializerProtocol,
        processed_events: ProcessedEventStoreProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._name = name
        self._serializer = serializer
        self._processed_events = processed_events
        self._logger = logger.bind(consumer=name)
        self._subscriptions: dict[str, _Subscription] = {}
        self._in_flight: dict[UUID, _Claim] = {}

    @property
    def name(self) -> str:
        return self._name

    @property
    def event_types(self) -> list[str]:
        """Event names this consumer handles (its routing keys)."""
        return list(self._subscriptions)

    def subscribe(
        self,
        event_class: type[IntegrationEvent],
        handler: IntegrationEventHandler[Any],
    ) -> None:
        """Register the handler for one event type.

        Raises:
            ValueError: If the event type already has a handler.
        """
        event_type = event_class.event_name()
        if event_type in self._subscriptions:
            raise ValueError(
                f"Consumer '{self._name}' already handles {event_type}"
            )
        self._subscriptions[event_type] = _Subscription(event_class, handler)

    async def consume(self, event_type: str, message: str) -> bool:
        """Handle one delivered message.

        Returns:
            True when a handler ran, False when the message was skipped
            (unknown type or duplicate delivery).

        Raises:
            ValueError: If the message cannot be decoded.
            Exception: Whatever the handler raised.
        """
        subscription = self._subscriptions.get(event_type)
        if subscription is None:
            self._logger.debug("integration_event_ignored", event_type=event_type)
            return False

        event = self._serializer.deserialize(subscription.event_class, message)
        log = self._logger.bind(event_type=event_type, event_id=str(event.event_id))

        async with self._claim(event.event_id):
            if await self._processed_events.is_processed(self._name, event.event_id):
                log.info("integration_event_duplicate_skipped")
                return False

            try:
                await subscription.handler.handle(event)
            except Exception as e:
                log.error("integration_event_handler_failed", error=e)
                raise

            await self._processed_events.mark_processed(self._name, event.event_id)
        log.info("integration_event_handled")
        return True

    @asynccontextmanager
    async def _claim(self, event_id: UUID) -> AsyncIterator[None]:
        """Hold the per-event lock; the entry is dropped with its last holder."""
        claim = self._in_flight.get(event_id)
        if claim is None:
            claim = self._in_flight[event_id] = _Claim()
        claim.holders += 1
        try:
            async with claim.lock:
                yield
        finally:
            claim.holders -= 1
            if claim.holders == 0:
                del self._in_flight[event_id]
