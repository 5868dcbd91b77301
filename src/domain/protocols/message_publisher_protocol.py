"""MessagePublisherProtocol definition (port).

The outbound broker seam. The event type name is the routing key, so
consumers can bind to the events they care about without deserializing
anything else.

Implementations:
    - InMemoryMessageBroker: src/infrastructure/messaging/in_memory_broker.py
"""

from typing import Protocol


class MessagePublisherProtocol(Protocol):
    """Protocol for broker publishers."""

    async def publish(self, event_type: str, message: str) -> None:
        """Send a serialized message to the exchange.

        Args:
            event_type: Event name, used as the routing key.
            message: Serialized integration event.

        Raises:
            Exception: Transport failures (broker unreachable).
        """
        ...
