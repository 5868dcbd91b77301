"""In-memory processed event store.

Implements ProcessedEventStoreProtocol for single-process consumers and
tests. Each consumer keeps at most ``retention`` ids, evicting the least
recently seen; redeliveries older than that window are handled again. A
durable store is needed when consumers restart while messages are still
being redelivered.
"""

from collections import OrderedDict, defaultdict
from uuid import UUID


class InMemoryProcessedEventStore:
    """Bounded record of handled event ids per consumer.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Args:
        retention: Ids kept per consumer. None keeps every id.

    Raises:
        ValueError: If retention is below 1.
    """

    def __init__(self, retention: int | None = 10_000) -> None:
        if retention is not None and retention < 1:
            raise ValueError("retention must be at least 1 when set")
        self._retention = retention
        self._processed: dict[str, OrderedDict[UUID, None]] = defaultdict(OrderedDict)

    async def is_processed(self, consumer: str, event_id: UUID) -> bool:
        seen = self._processed.get(consumer)
        if seen is None or event_id not in seen:
            return False
        seen.move_to_end(event_id)
        return True

    async def mark_processed(self, consumer: str, event_id: UUID) -> None:
        seen = self._processed[consumer]
        seen[event_id] = None
        seen.move_to_end(event_id)
        if self._retention is not None:
            while len(seen) > self._retention:
                seen.popitem(last=False)
