"""OutboxRepositoryProtocol definition (port).

The outbox stores serialized integration events in the same transaction
as the state change that produced them. A background processor later
publishes them, so an event is never lost when the broker is down at
commit time.
"""

from collections.abc import Sequence
from typing import Protocol
from uuid import UUID

from src.domain.events.integration_event import IntegrationEvent


class OutboxEntry(Protocol):
    """Read view of one stored outbox message."""

    id: UUID
    type: str
    content: str
    retry_count: int


class OutboxRepositoryProtocol(Protocol):
    """Protocol for transactional outbox storage."""

    def add(self, event: IntegrationEvent) -> None:
        """Stage an event in the current unit of work."""
        ...

    async def get_unprocessed(
        self, batch_size: int, max_retries: int
    ) -> Sequence[OutboxEntry]:
        """Return pending messages oldest first, skipping abandoned ones."""
        ...

    async def mark_processed(self, message_id: UUID) -> None:
        """Record successful publication."""
        ...

    async def mark_failed(
        self, message_id: UUID, error: str, max_retries: int
    ) -> None:
        """Record a failed publication and bump the retry count."""
        ...
