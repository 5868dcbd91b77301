"""Tenancy, audit and domain event mixins.

Models that carry these satisfy the MultiTenantEntity, AuditableEntity and
EventRecordingEntity protocols, which is how the repositories and the unit
of work recognize them.

Usage:
    class TaskModel(DomainEventsMixin, TenantMixin, AuditMixin, BaseMutableModel):
        __tablename__ = "tasks"
"""

from uuid import UUID as PythonUUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.domain.events.domain_event import DomainEvent

_EVENTS_ATTR = "_pending_domain_events"


class TenantMixin:
    """Owning tenant column (indexed, scoped by the repositories)."""

    tenant_id: Mapped[PythonUUID | None] = mapped_column(
        Uuid, nullable=True, index=True
    )


class AuditMixin:
    """Who created and last modified the row (stamped at commit)."""

    created_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String(255), nullable=True)

    def set_created_info(self, username: str) -> None:
        self.created_by = username

    def set_updated_info(self, username: str) -> None:
        self.updated_by = username


class DomainEventsMixin:
    """Records domain events raised by the aggregate.

    The list is plain instance state (not a column). SQLAlchemy builds loaded
    instances without calling __init__, so it is created on first use.
    """

    @property
    def domain_events(self) -> tuple[DomainEvent, ...]:
        return tuple(self._event_list())

    def add_domain_event(self, event: DomainEvent) -> None:
        self._event_list().append(event)

    def remove_domain_event(self, event: DomainEvent) -> None:
        events = self._event_list()
        if event in events:
            events.remove(event)

    def clear_domain_events(self) -> None:
        self._event_list().clear()

    def pull_domain_events(self) -> list[DomainEvent]:
        events = list(self._event_list())
        self.clear_domain_events()
        return events

    def _event_list(self) -> list[DomainEvent]:
        events = self.__dict__.get(_EVENTS_ATTR)
        if events is None:
            events = []
            self.__dict__[_EVENTS_ATTR] = events
        return events
