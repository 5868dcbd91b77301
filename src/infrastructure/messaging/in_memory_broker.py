"""In-memory message broker.

Implements MessagePublisherProtocol for single-process deployments and
tests. Messages are routed by event type (routing key) to bound consumers.
Suitable for local development; a networked broker adapter replaces it in
multi-service deployments.

Architecture:
    - Implements MessagePublisherProtocol (hexagonal adapter pattern)
    - Dictionary-based bindings (event type -> list of callbacks)
    - Fail-open delivery (one consumer failure doesn't break others)
    - Concurrent delivery (asyncio.gather)
    - Every accepted message is recorded for inspection

Usage:
    >>> broker = InMemoryMessageBroker(logger=logger)
    >>> broker.attach(notification_consumer)
    >>> await broker.publish("todo.task_created", message)
"""

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any, Protocol

from src.core.constants import MESSAGE_CONTENT_TYPE
from src.domain.protocols.logger_protocol import LoggerProtocol

MessageCallback = Callable[[str, str], Awaitable[Any]]


class MessageConsumer(Protocol):
    """Anything that can receive routed messages (e.g. IntegrationEventConsumer)."""

    @property
    def name(self) -> str: ...

    @property
    def event_types(self) -> list[str]: ...

    async def consume(self, event_type: str, message: str) -> bool: ...


@dataclass(frozen=True, slots=True, kw_only=True)
class PublishedMessage:
    """Record of one message accepted by the broker."""

    exchange: str
    event_type: str
    message: str
    published_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    content_type: str = MESSAGE_CONTENT_TYPE


class InMemoryMessageBroker:
    """In-memory broker with fail-open delivery.

    Thread Safety:
        - NOT thread-safe (single-process, single-threaded async design)

    Args:
        logger: Logger for routing and consumer failures.
        exchange: Exchange name recorded on published messages.
    """

    def __init__(self, logger: LoggerProtocol, exchange: str = "integration.events") -> None:
        self._logger = logger
        self._exchange = exchange
        self._bindings: dict[str, list[MessageCallback]] = defaultdict(list)
        self._published: list[PublishedMessage] = []

    @property
    def exchange(self) -> str:
        return self._exchange

    @property
    def published(self) -> tuple[PublishedMessage, ...]:
        """Every message accepted so far, in publish order."""
        return tuple(self._published)

    def bind(self, event_type: str, callback: MessageCallback) -> None:
        """Route messages with this event type to callback."""
        self._bindings[event_type].append(callback)

    def attach(self, consumer: MessageConsumer) -> None:
        """Bind a consumer to every event type it handles."""
        for event_type in consumer.event_types:
            self.bind(event_type, consumer.consume)

    async def publish(self, event_type: str, message: str) -> None:
        """Accept a message and deliver it to bound consumers.

        Consumer failures are logged but NOT propagated to the publisher.
        """
        self._published.append(
            PublishedMessage(exchange=self._exchange, event_type=event_type, message=message)
        )

        callbacks = self._bindings.get(event_type, [])
        if not callbacks:
            self._logger.debug("message_unrouted", event_type=event_type)
            return

        results = await asyncio.gather(
            *(callback(event_type, message) for callback in callbacks),
            return_exceptions=True,
        )
        for callback, result in zip(callbacks, results, strict=True):
            if isinstance(result, Exception):
                self._logger.warning(
                    "message_consumer_failed",
                    event_type=event_type,
                    consumer=getattr(callback, "__qualname__", repr(callback)),
                    error_type=type(result).__name__,
                    error_message=str(result),
                )
