"""JSON wire codec for integration events.

Events are stdlib dataclasses; pydantic TypeAdapters validate and dump
them, so UUID, datetime, Decimal and Enum fields round-trip without custom
encoders. The payload is the event's fields as a flat JSON object:

    {"event_id": "0190...", "occurred_on": "2026-01-02T03:04:05Z", "task_id": "..."}

The event name travels as the routing key, not in the payload.
"""

from typing import Any, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from src.domain.events.integration_event import IntegrationEvent

TEvent = TypeVar("TEvent", bound=IntegrationEvent)


class JsonIntegrationEventSerializer:
    """Integration event codec backed by pydantic.

    This class does NOT inherit from the protocol (Protocol uses structural typing).
    """

    def __init__(self) -> None:
        self._adapters: dict[type[IntegrationEvent], TypeAdapter[Any]] = {}

    def serialize(self, event: IntegrationEvent) -> str:
        return self._adapter(type(event)).dump_json(event).decode("utf-8")

    def deserialize(self, event_class: type[TEvent], message: str) -> TEvent:
        """Decode a message into an event of event_class.

        Raises:
            ValueError: If the message is not valid JSON for event_class.
        """
        try:
            return self._adapter(event_class).validate_json(message)
        except PydanticValidationError as e:
            raise ValueError(
                f"Message is not a valid {event_class.event_name()} event: "
                f"{e.error_count()} error(s)"
            ) from e

    def _adapter(self, event_class: type[IntegrationEvent]) -> TypeAdapter[Any]:
        adapter = self._adapters.get(event_class)
        if adapter is None:
            adapter = TypeAdapter(event_class)
            self._adapters[event_class] = adapter
        return adapter
