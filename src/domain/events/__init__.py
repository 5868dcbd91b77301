"""Domain and integration events.

- DomainEvent: raised by aggregates, dispatched in-process during commit
- IntegrationEvent: primitive-only message published to other services

Usage:
    >>> from src.domain.events import DomainEvent, IntegrationEvent
    >>>
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    ... class TaskCompleted(DomainEvent):
    ...     task_id: UUID
"""

from src.domain.events.domain_event import DomainEvent
from src.domain.events.integration_event import IntegrationEvent

__all__ = ["DomainEvent", "IntegrationEvent"]
