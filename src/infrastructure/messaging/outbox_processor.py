"""Outbox processor.

Background job that publishes staged integration events. Each pass reads
up to batch_size pending messages oldest first and publishes them in that
order. Every outcome is committed per message, so a crash mid-batch never
republishes messages already marked processed.

A message that fails max_retries times is abandoned: it stays in the table
with its error prefixed "Max retries exceeded: " and is no longer picked up.

Usage:
    processor = get_outbox_processor()
    stop = asyncio.Event()
    task = asyncio.create_task(processor.run(stop))
    ...
    stop.set()
    await task
"""

import asyncio
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.protocols.integration_event_serializer_protocol import (
    IntegrationEventSerializerProtocol,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.message_publisher_protocol import MessagePublisherProtocol
from src.infrastructure.persistence.repositories.outbox_repository import (
    SqlAlchemyOutboxRepository,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class OutboxBatchResult:
    """Outcome of one processing pass."""

    published: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.published + self.failed


class OutboxProcessor:
    """Publish pending outbox messages.

    Args:
        session_factory: Source of sessions (one per pass).
        publisher: Broker publisher.
        serializer: Wire codec (only needed by the repository's add path).
        logger: Logger for publish outcomes.
        batch_size: Maximum messages per pass.
        max_retries: Failed attempts before a message is abandoned.
        interval_seconds: Pause between passes in run().
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        publisher: MessagePublisherProtocol,
        serializer: IntegrationEventSerializerProtocol,
        logger: LoggerProtocol,
        *,
        batch_size: int = 100,
        max_retries: int = 3,
        interval_seconds: float = 5.0,
    ) -> None:
        self._session_factory = session_factory
        self._publisher = publisher
        self._serializer = serializer
        self._logger = logger
        self._batch_size = batch_size
        self._max_retries = max_retries
        self._interval_seconds = interval_seconds

    async def process_batch(self) -> OutboxBatchResult:
        """Publish one batch of pending messages."""
        published = failed = 0
        async with self._session_factory() as session:
            outbox = SqlAlchemyOutboxRepository(session, self._serializer)
            messages = await outbox.get_unprocessed(self._batch_size, self._max_retries)

            for message in messages:
                try:
                    await self._publisher.publish(message.type, message.content)
                except Exception as e:
                    await outbox.mark_failed(
                        message.id, str(e) or type(e).__name__, self._max_retries
                    )
                    failed += 1
                    self._logger.warning(
                        "outbox_message_failed",
                        message_id=str(message.id),
                        event_type=message.type,
                        retry_count=message.retry_count,
                        abandoned=message.retry_count >= self._max_retries,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                else:
                    await outbox.mark_processed(message.id)
                    published += 1
                    self._logger.debug(
                        "outbox_message_published",
                        message_id=str(message.id),
                        event_type=message.type,
                    )
                await session.commit()

        if published or failed:
            self._logger.info(
                "outbox_batch_processed", published=published, failed=failed
            )
        return OutboxBatchResult(published=published, failed=failed)

    async def run(self, stop_event: asyncio.Event) -> None:
        """Process batches every interval until stop_event is set."""
        self._logger.info("outbox_processor_started", interval_seconds=self._interval_seconds)
        while not stop_event.is_set():
            try:
                await self.process_batch()
            except Exception as e:
                self._logger.error("outbox_batch_crashed", error=e)
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=self._interval_seconds)
            except TimeoutError:
                pass
        self._logger.info("outbox_processor_stopped")
