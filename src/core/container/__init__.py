"""Container module - Centralized dependency injection.

This module re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_dispatcher, ...

The container is organized into modules by concern:
- infrastructure: Logging, database, serializer, domain event dispatcher,
  unit of work factory
- messaging: Broker, integration event publisher/consumer, outbox processor
- cqrs: Request registry and dispatcher
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_domain_event_dispatcher,
    get_integration_event_serializer,
    get_logger,
    get_unit_of_work_factory,
)

# Messaging
from src.core.container.messaging import (
    create_integration_event_consumer,
    get_integration_event_publisher,
    get_message_broker,
    get_outbox_processor,
    get_processed_event_store,
)

# Request dispatch
from src.core.container.cqrs import get_dispatcher, get_request_registry

__all__ = [
    # Infrastructure
    "get_database",
    "get_domain_event_dispatcher",
    "get_integration_event_serializer",
    "get_logger",
    "get_unit_of_work_factory",
    # Messaging
    "create_integration_event_consumer",
    "get_integration_event_publisher",
    "get_message_broker",
    "get_outbox_processor",
    "get_processed_event_store",
    # Request dispatch
    "get_dispatcher",
    "get_request_registry",
]
