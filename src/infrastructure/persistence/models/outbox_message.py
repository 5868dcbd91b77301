"""Outbox message database model.

One row per integration event staged by a unit of work. The row id is the
event id, so an event can only be stored once.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class OutboxMessage(BaseModel):
    """Serialized integration event awaiting publication.

    Fields:
        id: Event id (from BaseModel)
        created_at: When the row was staged (from BaseModel)
        type: Event name (routing key)
        content: Serialized event
        occurred_on: When the event occurred (publication order)
        processed_on: When the event was published (None while pending)
        error: Last publication error
        retry_count: Failed publication attempts

    Indexes:
        - idx_outbox_pending: (processed_on, occurred_on) for the processor scan
    """

    __tablename__ = "outbox_messages"
    __table_args__ = (Index("idx_outbox_pending", "processed_on", "occurred_on"),)

    type: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    occurred_on: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    processed_on: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    retry_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def is_processed(self) -> bool:
        return self.processed_on is not None
