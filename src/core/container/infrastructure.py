"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Logging (structlog console/JSON)
- Database (SQLAlchemy async engine)
- Integration event serializer (pydantic JSON)
- Domain event dispatcher (handlers run at commit)
- Unit of work factory (one unit per request)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.application.domain_events import DomainEventDispatcher
    from src.domain.protocols.integration_event_serializer_protocol import (
        IntegrationEventSerializerProtocol,
    )
    from src.domain.protocols.logger_protocol import LoggerProtocol
    from src.domain.protocols.unit_of_work_protocol import UnitOfWorkFactory


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON), unless LOG_JSON overrides

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    return ConsoleAdapter(
        use_json=settings.use_json_logs,
        level=settings.log_level,
        service=settings.app_name,
    )


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Returns:
        Database manager instance (engine + session factory).
    """
    return Database.from_settings(settings)


@lru_cache()
def get_integration_event_serializer() -> "IntegrationEventSerializerProtocol":
    """Get integration event codec singleton (app-scoped)."""
    from src.infrastructure.messaging.serialization import (
        JsonIntegrationEventSerializer,
    )

    return JsonIntegrationEventSerializer()


@lru_cache()
def get_domain_event_dispatcher() -> "DomainEventDispatcher":
    """Get the domain event dispatcher singleton (app-scoped).

    Services register their domain event handlers at startup:

        dispatcher = get_domain_event_dispatcher()
        dispatcher.register(TaskCompleted, TaskCompletedToOutbox(get_logger()))
    """
    from src.application.domain_events import DomainEventDispatcher

    return DomainEventDispatcher(get_logger())


@lru_cache()
def get_unit_of_work_factory() -> "UnitOfWorkFactory":
    """Get the unit of work factory singleton (app-scoped).

    Handlers hold the factory and open one unit of work per request.

    Usage:
        uow_factory = get_unit_of_work_factory()
        async with uow_factory(ctx) as uow:
            ...
    """
    from src.infrastructure.persistence.unit_of_work import (
        SqlAlchemyUnitOfWorkFactory,
    )

    return SqlAlchemyUnitOfWorkFactory(
        database=get_database(),
        serializer=get_integration_event_serializer(),
        logger=get_logger(),
        settings=settings,
        domain_events=get_domain_event_dispatcher(),
    )
