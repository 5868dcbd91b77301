"""IntegrationEventSerializerProtocol definition (port).

The wire format is a contract between each producing and consuming
service pair. Publisher and consumer services only see this protocol.

Implementations:
    - JsonIntegrationEventSerializer: src/infrastructure/messaging/serialization.py
"""

from typing import Protocol, TypeVar

from src.domain.events.integration_event import IntegrationEvent

TEvent = TypeVar("TEvent", bound=IntegrationEvent)


class IntegrationEventSerializerProtocol(Protocol):
    """Protocol for integration event wire codecs."""

    def serialize(self, event: IntegrationEvent) -> str:
        """Encode an event for transport."""
        ...

    def deserialize(self, event_class: type[TEvent], message: str) -> TEvent:
        """Decode a message into an event of event_class.

        Raises:
            ValueError: If the message does not describe an event_class event.
        """
        ...
