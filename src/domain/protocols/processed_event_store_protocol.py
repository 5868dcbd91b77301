"""ProcessedEventStoreProtocol definition (port).

Consumers record the event_id of every event they finished handling so
redelivered duplicates are skipped.
"""

from typing import Protocol
from uuid import UUID


class ProcessedEventStoreProtocol(Protocol):
    """Protocol for consumer-side deduplication storage."""

    async def is_processed(self, consumer: str, event_id: UUID) -> bool:
        """Check whether consumer already handled event_id."""
        ...

    async def mark_processed(self, consumer: str, event_id: UUID) -> None:
        """Record that consumer handled event_id."""
        ...
