"""Base domain event class.

Domain events are facts raised by an aggregate inside its own service
(TaskCompleted, ProjectArchived). The aggregate records them while a handler
mutates it; the unit of work collects and dispatches them during commit, so
their handlers stage work (typically outbox rows) in the same transaction.

Unlike integration events they never leave the process, so they may carry
any value the domain needs.

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    ... class TaskCompleted(DomainEvent):
    ...     task_id: UUID
    >>>
    >>> task.add_domain_event(TaskCompleted(task_id=task.id))
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.domain.events.integration_event import occurred_now


@dataclass(frozen=True, kw_only=True, slots=True)
class DomainEvent:
    """Base class for all domain events.

    Attributes:
        event_id: Unique identifier of this occurrence (UUIDv7).
        occurred_on: When it was raised (UTC, non-decreasing in-process).
            Dispatch follows this order across aggregates.
    """

    event_id: UUID = field(default_factory=uuid7)
    occurred_on: datetime = field(default_factory=occurred_now)

    @classmethod
    def event_name(cls) -> str:
        return cls.__name__
