"""SQLAlchemy unit of work.

One AsyncSession per unit of work. Repositories and the outbox obtained
from the unit share that session, so everything they stage commits in one
transaction. Domain events recorded by tracked aggregates are dispatched
right before the database commit, so their handlers stage into the same
transaction. The session never autoflushes: constraint violations surface
at commit(), where they are translated into domain errors.

Usage:
    async with uow_factory(ctx) as uow:
        await uow.write_repository(TaskModel).add(ctx, task)
        uow.outbox.add(TaskCreated(task_id=task.id, title=task.title))
        result = await uow.commit()
"""

from types import TracebackType
from typing import Any, Self, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.core.config import Settings
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.events.domain_event import DomainEvent
from src.domain.protocols.domain_event_dispatcher_protocol import (
    DomainEventDispatcherProtocol,
)
from src.domain.protocols.entity_protocols import AuditableEntity, EventRecordingEntity
from src.domain.protocols.entity_query_configuration import EntityQueryConfiguration
from src.domain.protocols.integration_event_serializer_protocol import (
    IntegrationEventSerializerProtocol,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.specifications import Specification
from src.domain.value_objects.request_context import RequestContext
from src.infrastructure.persistence.adapters.sqlalchemy_storage import (
    SqlAlchemyStorageAdapter,
)
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories.outbox_repository import (
    SqlAlchemyOutboxRepository,
)
from src.infrastructure.persistence.repositories.read_repository import ReadRepository
from src.infrastructure.persistence.repositories.write_repository import (
    WriteRepository,
)

TModel = TypeVar("TModel")

# PostgreSQL unique_violation
_UNIQUE_VIOLATION_SQLSTATE = "23505"


class SqlAlchemyUnitOfWork:
    """Atomic commit boundary over one session.

    This class does NOT inherit from the protocol (Protocol uses structural typing).

    Args:
        session_factory: Source of the session opened on enter.
        ctx: Caller context (audit stamping).
        serializer: Wire codec for outbox rows.
        logger: Logger for commit outcomes.
        settings: Limits passed to read repositories.
        domain_events: Dispatcher for events recorded by aggregates; when
            None, recorded events are left on the aggregates.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        ctx: RequestContext,
        serializer: IntegrationEventSerializerProtocol,
        logger: LoggerProtocol,
        settings: Settings | None = None,
        domain_events: DomainEventDispatcherProtocol | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._ctx = ctx
        self._serializer = serializer
        self._logger = logger
        self._settings = settings
        self._domain_events = domain_events
        self._session: AsyncSession | None = None

    async def __aenter__(self) -> Self:
        if self._session is not None:
            raise RuntimeError("Unit of work is already active")
        self._session = self._session_factory()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def session(self) -> AsyncSession:
        """Active session.

        Raises:
            RuntimeError: Outside the async context.
        """
        if self._session is None:
            raise RuntimeError("Unit of work is not active; use 'async with'")
        return self._session

    @property
    def context(self) -> RequestContext:
        return self._ctx

    def storage(self, model: type[TModel]) -> SqlAlchemyStorageAdapter[TModel]:
        return SqlAlchemyStorageAdapter(self.session, model)

    def read_repository(
        self,
        aggregate_type: type[TModel],
        *,
        query_configuration: EntityQueryConfiguration[Any] | None = None,
        specification: Specification[Any] | None = None,
    ) -> ReadRepository[TModel, Any]:
        return ReadRepository(
            self.storage(aggregate_type),
            query_configuration=query_configuration,
            specification=specification,
            settings=self._settings,
        )

    def write_repository(
        self,
        aggregate_type: type[TModel],
        *,
        query_configuration: EntityQueryConfiguration[Any] | None = None,
    ) -> WriteRepository[TModel, Any]:
        return WriteRepository(
            self.storage(aggregate_type), query_configuration=query_configuration
        )

    @property
    def outbox(self) -> SqlAlchemyOutboxRepository:
        return SqlAlchemyOutboxRepository(self.session, self._serializer)

    async def commit(self) -> Result[int, DomainError]:
        """Persist every staged write atomically.

        Dispatches recorded domain events (their handlers may stage more
        rows), stamps audit columns with the caller's name, then commits. A
        cancelled commit rolls back before the cancellation propagates.

        Returns:
            Success(affected record count), Failure(ConflictError) for
            uniqueness violations, Failure(ValidationError) for other
            constraint violations.
        """
        session = self.session
        try:
            await self._dispatch_domain_events(session)
            self._stamp_audit(session)
            affected = self._pending_count(session)
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            error = _translate_integrity_error(e)
            self._logger.warning(
                "unit_of_work_commit_rejected",
                **error.log_fields(),
                reason=str(e.orig) if e.orig is not None else str(e),
            )
            return Failure(error=error)
        except BaseException:
            await session.rollback()
            raise

        self._logger.debug("unit_of_work_committed", affected=affected)
        return Success(value=affected)

    async def rollback(self) -> None:
        await self.session.rollback()

    async def close(self) -> None:
        """Close the session; uncommitted work is discarded."""
        if self._session is not None:
            session, self._session = self._session, None
            await session.close()

    async def _dispatch_domain_events(self, session: AsyncSession) -> None:
        if self._domain_events is None:
            return
        events = _collect_domain_events(session)
        if events:
            await self._domain_events.dispatch(events, self)

    def _stamp_audit(self, session: AsyncSession) -> None:
        username = self._ctx.audit_name
        for entity in session.new:
            if isinstance(entity, AuditableEntity):
                entity.set_created_info(username)
        for entity in session.dirty:
            if isinstance(entity, AuditableEntity) and session.is_modified(entity):
                entity.set_updated_info(username)

    @staticmethod
    def _pending_count(session: AsyncSession) -> int:
        modified = sum(1 for entity in session.dirty if session.is_modified(entity))
        return len(session.new) + modified + len(session.deleted)


class SqlAlchemyUnitOfWorkFactory:
    """Build a unit of work per request (UnitOfWorkFactory).

    Example:
        >>> uow_factory = SqlAlchemyUnitOfWorkFactory(database, serializer, logger)
        >>> async with uow_factory(ctx) as uow:
        ...     ...
    """

    def __init__(
        self,
        database: Database,
        serializer: IntegrationEventSerializerProtocol,
        logger: LoggerProtocol,
        settings: Settings | None = None,
        domain_events: DomainEventDispatcherProtocol | None = None,
    ) -> None:
        self._database = database
        self._serializer = serializer
        self._logger = logger
        self._settings = settings
        self._domain_events = domain_events

    def __call__(self, ctx: RequestContext) -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(
            self._database.session_factory,
            ctx,
            self._serializer,
            self._logger,
            self._settings,
            self._domain_events,
        )


def _translate_integrity_error(error: IntegrityError) -> DomainError:
    original = error.orig
    sqlstate = getattr(original, "sqlstate", None) or getattr(original, "pgcode", None)
    reason = str(original if original is not None else error).lower()

    if sqlstate == _UNIQUE_VIOLATION_SQLSTATE or "unique" in reason or "duplicate" in reason:
        return ConflictError.duplicate("record")
    return ValidationError(
        code=ErrorCode.COMMIT_CONSTRAINT_VIOLATION,
        message="The changes violate a data constraint.",
    )


def _collect_domain_events(session: AsyncSession) -> list[DomainEvent]:
    seen: set[int] = set()
    events: list[DomainEvent] = []
    tracked = [*session.new, *session.identity_map.values(), *session.deleted]
    for entity in tracked:
        if id(entity) in seen or not isinstance(entity, EventRecordingEntity):
            continue
        seen.add(id(entity))
        events.extend(entity.pull_domain_events())
    events.sort(key=lambda event: event.occurred_on)
    return events
