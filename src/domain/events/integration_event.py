"""Base integration event class.

Integration events are facts one service publishes for other services to
consume asynchronously (e.g. TaskCreated triggering a notification in a
separate process). They cross process boundaries, so they carry only
primitive, structurally simple values: never aggregates, ORM rows, or types
that are not shared between services.

Architecture:
    - Frozen dataclass (immutable after creation)
    - Auto-generated event_id (UUIDv7, time-ordered) for deduplication
    - Auto-generated occurred_on (UTC) that never goes backwards in-process
    - event_name() is the routing key and the wire type name

Usage:
    >>> @dataclass(frozen=True, kw_only=True, slots=True)
    ... class TaskCreated(IntegrationEvent):
    ...     EVENT_NAME: ClassVar[str] = "todo.task_created"
    ...     task_id: UUID
    ...     tenant_id: UUID
    ...     title: str
    >>>
    >>> event = TaskCreated(task_id=uuid7(), tenant_id=tenant_id, title="Ship it")
    >>> event.event_name()
    'todo.task_created'
"""

import threading
from dataclasses import dataclass, field, fields
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar
from uuid import UUID

from uuid_extensions import uuid7

_SCALAR_TYPES: tuple[type, ...] = (
    str,
    int,
    float,
    bool,
    UUID,
    datetime,
    date,
    Decimal,
    Enum,
)


class _MonotonicUtcClock:
    """UTC wall clock that never returns an earlier instant than before.

    The system clock may step backwards (NTP adjustments); events built in
    sequence must still carry non-decreasing occurred_on values.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last = datetime.min.replace(tzinfo=UTC)

    def now(self) -> datetime:
        with self._lock:
            current = datetime.now(UTC)
            if current < self._last:
                current = self._last
            self._last = current
            return current


_clock = _MonotonicUtcClock()


def occurred_now() -> datetime:
    """Current UTC instant from the process-wide event clock."""
    return _clock.now()


def _is_structurally_simple(value: Any) -> bool:
    if value is None or isinstance(value, _SCALAR_TYPES):
        return True
    if isinstance(value, (list, tuple, frozenset)):
        return all(_is_structurally_simple(item) for item in value)
    if isinstance(value, dict):
        return all(
            isinstance(key, str) and _is_structurally_simple(item)
            for key, item in value.items()
        )
    return False


@dataclass(frozen=True, kw_only=True, slots=True)
class IntegrationEvent:
    """Base class for all integration events.

    All integration events MUST:
        1. Inherit from this base class
        2. Use past tense naming (TaskCreated, NOT CreateTask)
        3. Be frozen, kw_only dataclasses
        4. Hold only primitive values (str, int, float, bool, None, UUID,
           datetime, date, Decimal, Enum, and lists/tuples/dicts of these)

    Attributes:
        event_id: Unique identifier for this event instance. Consumers use
            it to discard duplicate deliveries.
        occurred_on: When the event was created (UTC).

    Class Attributes:
        EVENT_NAME: Optional stable wire name. Set it to keep the routing
            key unchanged when the class is renamed.

    Raises:
        TypeError: At construction, when a field holds a value that cannot
            cross a process boundary.
    """

    EVENT_NAME: ClassVar[str | None] = None

    event_id: UUID = field(default_factory=uuid7)
    occurred_on: datetime = field(default_factory=_clock.now)

    def __post_init__(self) -> None:
        for event_field in fields(self):
            value = getattr(self, event_field.name)
            if not _is_structurally_simple(value):
                raise TypeError(
                    f"{type(self).__name__}.{event_field.name} holds "
                    f"{type(value).__name__}; integration events may only carry "
                    "primitive values"
                )

    @classmethod
    def event_name(cls) -> str:
        """Return the wire name of this event type (routing key).

        Returns:
            EVENT_NAME when the class defines one, otherwise the class name.
        """
        return cls.EVENT_NAME or cls.__name__

    @property
    def event_type(self) -> str:
        """Wire name of this event instance."""
        return self.event_name()
