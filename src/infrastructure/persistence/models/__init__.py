"""Infrastructure-owned tables (aggregate tables live in each service)."""

from src.infrastructure.persistence.models.outbox_message import OutboxMessage

__all__ = ["OutboxMessage"]
