"""SQLAlchemy outbox repository.

Implements OutboxRepositoryProtocol on a unit of work's session: add()
stages the serialized event next to the state change, so both commit or
neither does.
"""

from collections.abc import Sequence
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.constants import OUTBOX_MAX_RETRIES_PREFIX
from src.domain.events.integration_event import IntegrationEvent
from src.domain.protocols.integration_event_serializer_protocol import (
    IntegrationEventSerializerProtocol,
)
from src.infrastructure.persistence.models.outbox_message import OutboxMessage


class SqlAlchemyOutboxRepository:
    """Outbox storage on one session.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Args:
        session: Session of the unit of work (or of the outbox processor).
        serializer: Wire codec used to store events.
    """

    def __init__(
        self, session: AsyncSession, serializer: IntegrationEventSerializerProtocol
    ) -> None:
        self._session = session
        self._serializer = serializer

    def add(self, event: IntegrationEvent) -> None:
        self._session.add(
            OutboxMessage(
                id=event.event_id,
                type=event.event_type,
                content=self._serializer.serialize(event),
                occurred_on=event.occurred_on,
                retry_count=0,
            )
        )

    async def get_unprocessed(
        self, batch_size: int, max_retries: int
    ) -> Sequence[OutboxMessage]:
        """Pending messages oldest first, excluding abandoned ones."""
        stmt = (
            select(OutboxMessage)
            .where(
                OutboxMessage.processed_on.is_(None),
                OutboxMessage.retry_count < max_retries,
            )
            .order_by(OutboxMessage.occurred_on, OutboxMessage.id)
            .limit(batch_size)
        )
        result = await self._session.execute(stmt)
        return result.scalars().all()

    async def mark_processed(self, message_id: UUID) -> None:
        message = await self._get(message_id)
        message.processed_on = datetime.now(UTC)
        message.error = None

    async def mark_failed(self, message_id: UUID, error: str, max_retries: int) -> None:
        """Bump the retry count; past max_retries the message is abandoned."""
        message = await self._get(message_id)
        message.retry_count += 1
        message.error = (
            f"{OUTBOX_MAX_RETRIES_PREFIX}{error}"
            if message.retry_count >= max_retries
            else error
        )

    async def _get(self, message_id: UUID) -> OutboxMessage:
        message = await self._session.get(OutboxMessage, message_id)
        if message is None:
            raise LookupError(f"Outbox message {message_id} does not exist")
        return message
