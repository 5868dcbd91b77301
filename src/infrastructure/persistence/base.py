"""Declarative base for aggregates and infrastructure tables.

The generic repositories work on ORM models directly: a model class is the
aggregate type, and a unit of work stages and loads its instances.

Two bases:
    BaseModel: id + created_at. Append-only rows (OutboxMessage).
    BaseMutableModel: adds updated_at. Anything the write repository updates.

Combine with TenantMixin / AuditMixin (see mixins.py) for tenant scoping and
created_by/updated_by stamping.

Usage:
    class TaskModel(TenantMixin, AuditMixin, BaseMutableModel):
        __tablename__ = "tasks"
        title: Mapped[str]

    task = TaskModel(title="Ship it")
    task.id  # already set: UUIDv7, before any flush
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, event, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


def utc_now() -> datetime:
    return datetime.now(UTC)


class BaseModel(DeclarativeBase):
    """Root of every mapped class.

    Attributes:
        id: UUIDv7 primary key, assigned when the instance is constructed so
            handlers can reference it (e.g. in an outbox event) before commit.
        created_at: Insert time (UTC).
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(Uuid, primary_key=True, default=uuid7)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__}(id={self.id})>"


@event.listens_for(BaseModel, "init", propagate=True)
def _assign_identity(
    target: BaseModel, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> None:
    kwargs.setdefault("id", uuid7())


class BaseMutableModel(BaseModel):
    """Base for rows that change after insert.

    Attributes:
        updated_at: Refreshed by SQLAlchemy on every UPDATE.
    """

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
        server_default=func.now(),
    )
