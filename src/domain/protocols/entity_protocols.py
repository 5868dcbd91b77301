"""Structural markers for aggregates with tenancy and audit columns.

Repositories and the unit of work check these at runtime: a multi-tenant
aggregate gets tenant scoping and tenant stamping, an auditable one gets
created_by/updated_by stamped, and an event-recording one has its domain
events dispatched before commit.
"""

from typing import Protocol, runtime_checkable
from uuid import UUID

from src.domain.events.domain_event import DomainEvent


@runtime_checkable
class MultiTenantEntity(Protocol):
    """Aggregate owned by exactly one tenant."""

    tenant_id: UUID | None


@runtime_checkable
class AuditableEntity(Protocol):
    """Aggregate that records who created and last modified it."""

    def set_created_info(self, username: str) -> None:
        """Stamp creation audit fields."""
        ...

    def set_updated_info(self, username: str) -> None:
        """Stamp modification audit fields."""
        ...


@runtime_checkable
class EventRecordingEntity(Protocol):
    """Aggregate that records domain events for dispatch at commit."""

    def pull_domain_events(self) -> list[DomainEvent]:
        """Return recorded events and forget them."""
        ...
