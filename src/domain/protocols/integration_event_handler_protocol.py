"""IntegrationEventHandler protocol (port).

One handler per event type, registered explicitly by each consuming
service. Delivery is at-least-once: a handler may see the same event_id
more than once and must tolerate it.
"""

from typing import Protocol, TypeVar

from src.domain.events.integration_event import IntegrationEvent

TEvent = TypeVar("TEvent", bound=IntegrationEvent, contravariant=True)


class IntegrationEventHandler(Protocol[TEvent]):
    """Protocol for consumers of one integration event type."""

    async def handle(self, event: TEvent) -> None:
        """Apply the event's side effects.

        Raises:
            Exception: Any failure; the event is then left unprocessed so
                the broker can redeliver it.
        """
        ...
