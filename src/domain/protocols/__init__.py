"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.

Usage:
    from src.domain.protocols import LoggerProtocol, UnitOfWorkProtocol
"""

from src.domain.protocols.domain_event_dispatcher_protocol import (
    DomainEventDispatcherProtocol,
    DomainEventHandler,
)
from src.domain.protocols.entity_protocols import (
    AuditableEntity,
    EventRecordingEntity,
    MultiTenantEntity,
)
from src.domain.protocols.entity_query_configuration import (
    EntityQueryConfiguration,
    NoRelatedData,
)
from src.domain.protocols.integration_event_handler_protocol import (
    IntegrationEventHandler,
)
from src.domain.protocols.integration_event_serializer_protocol import (
    IntegrationEventSerializerProtocol,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.message_publisher_protocol import MessagePublisherProtocol
from src.domain.protocols.outbox_repository_protocol import (
    OutboxEntry,
    OutboxRepositoryProtocol,
)
from src.domain.protocols.processed_event_store_protocol import (
    ProcessedEventStoreProtocol,
)
from src.domain.protocols.repository_protocols import (
    ReadRepositoryProtocol,
    WriteRepositoryProtocol,
)
from src.domain.protocols.storage_adapter_protocol import StorageAdapterProtocol
from src.domain.protocols.unit_of_work_protocol import (
    UnitOfWorkFactory,
    UnitOfWorkProtocol,
)

__all__ = [
    "AuditableEntity",
    "DomainEventDispatcherProtocol",
    "DomainEventHandler",
    "EntityQueryConfiguration",
    "EventRecordingEntity",
    "IntegrationEventHandler",
    "IntegrationEventSerializerProtocol",
    "LoggerProtocol",
    "MessagePublisherProtocol",
    "MultiTenantEntity",
    "NoRelatedData",
    "OutboxEntry",
    "OutboxRepositoryProtocol",
    "ProcessedEventStoreProtocol",
    "ReadRepositoryProtocol",
    "StorageAdapterProtocol",
    "UnitOfWorkFactory",
    "UnitOfWorkProtocol",
    "WriteRepositoryProtocol",
]
