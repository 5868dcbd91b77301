"""Command and query handler base classes.

Handlers are the only place business rules run. Each one:

1. Validates request invariants
2. Opens a unit of work for the caller's context
3. Loads, mutates and stages aggregates through repositories
4. Commits (translating storage conflicts into Failure results)
5. Returns Success or Failure; expected failures are never raised

Handlers hold no per-request state. The container builds one instance per
handler type and the dispatcher reuses it for every request.

Example:
    >>> class CreateTaskHandler(CreateCommandHandler[CreateTask, UUID]):
    ...     async def handle(self, request, ctx):
    ...         async with self._uow_factory(ctx) as uow:
    ...             task = TaskModel(code=request.code, title=request.title)
    ...             await uow.write_repository(TaskModel).add(ctx, task)
    ...             committed = await self.commit(uow)
    ...             if is_failure(committed):
    ...                 return committed
    ...         return self.created(task.id)
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from src.application.cqrs.requests import (
    Command,
    CreateCommand,
    CreateCommandResponse,
    PagedListQuery,
    Query,
    Request,
    ResponseCommand,
)
from src.application.errors import ApplicationError, ApplicationErrorCode
from src.application.pagination import FilterValidator
from src.core.config import Settings
from src.core.errors import ValidationError
from src.core.result import Failure, Result, Success, is_failure
from src.domain.protocols.repository_protocols import ReadRepositoryProtocol
from src.domain.protocols.unit_of_work_protocol import (
    UnitOfWorkFactory,
    UnitOfWorkProtocol,
)
from src.domain.specifications import Specification
from src.domain.value_objects.paged_list import PagedList
from src.domain.value_objects.request_context import RequestContext

TRequest = TypeVar("TRequest", bound=Request[Any])
TResponse = TypeVar("TResponse")
TCommand = TypeVar("TCommand", bound=Command)
TResponseCommand = TypeVar("TResponseCommand", bound=ResponseCommand[Any])
TCreateCommand = TypeVar("TCreateCommand", bound=CreateCommand[Any])
TQuery = TypeVar("TQuery", bound=Query[Any])
TPagedQuery = TypeVar("TPagedQuery", bound=PagedListQuery[Any, Any])
TId = TypeVar("TId")
TAggregate = TypeVar("TAggregate")
TItem = TypeVar("TItem")
T = TypeVar("T")


class RequestHandler(ABC, Generic[TRequest, TResponse]):
    """Base handler: one handle() plus Result constructors per error kind."""

    @abstractmethod
    async def handle(
        self, request: TRequest, ctx: RequestContext
    ) -> Result[TResponse, ApplicationError]:
        """Execute the request for the given caller."""

    # Result helpers ---------------------------------------------------------

    @staticmethod
    def success(value: T) -> Success[T]:
        return Success(value=value)

    @staticmethod
    def validation_failed(
        message: str, *, field: str | None = None
    ) -> Failure[ApplicationError]:
        return Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.VALIDATION_FAILED,
                message=message,
                details={field: message} if field else None,
            )
        )

    @staticmethod
    def invalid(errors: Sequence[ValidationError]) -> Failure[ApplicationError]:
        """Failure combining several validation errors."""
        return Failure(error=ApplicationError.from_validation_errors(errors))

    @staticmethod
    def not_found(resource_type: str, resource_id: object) -> Failure[ApplicationError]:
        return Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.NOT_FOUND,
                message=f"{resource_type} '{resource_id}' was not found.",
                details={"resource_type": resource_type, "resource_id": str(resource_id)},
            )
        )

    @staticmethod
    def conflict(message: str) -> Failure[ApplicationError]:
        return Failure(
            error=ApplicationError(code=ApplicationErrorCode.CONFLICT, message=message)
        )

    @staticmethod
    def unauthorized(
        message: str = "Authentication is required.",
    ) -> Failure[ApplicationError]:
        return Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.UNAUTHORIZED, message=message
            )
        )

    @staticmethod
    def forbidden(message: str) -> Failure[ApplicationError]:
        return Failure(
            error=ApplicationError(code=ApplicationErrorCode.FORBIDDEN, message=message)
        )

    @staticmethod
    def unexpected(message: str) -> Failure[ApplicationError]:
        return Failure(
            error=ApplicationError(
                code=ApplicationErrorCode.UNEXPECTED, message=message
            )
        )

    @staticmethod
    async def commit(uow: UnitOfWorkProtocol) -> Result[int, ApplicationError]:
        """Commit a unit of work, classifying storage failures.

        Returns:
            Success(affected record count) or Failure(ApplicationError) with
            CONFLICT or VALIDATION_FAILED.
        """
        result = await uow.commit()
        if is_failure(result):
            return Failure(error=ApplicationError.from_domain_error(result.error))
        return Success(value=result.value)


class CommandHandler(RequestHandler[TCommand, None]):
    """Handler for commands without a response payload.

    Args:
        uow_factory: Builds a unit of work per request.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    def done() -> Success[None]:
        return Success(value=None)


class ResponseCommandHandler(RequestHandler[TResponseCommand, TResponse]):
    """Handler for commands that return a payload."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory


class CreateCommandHandler(
    RequestHandler[TCreateCommand, CreateCommandResponse[TId]], Generic[TCreateCommand, TId]
):
    """Handler for create commands.

    Every create in every service answers with the same payload shape via
    created().
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    @staticmethod
    def created(entity_id: TId) -> Success[CreateCommandResponse[TId]]:
        return Success(value=CreateCommandResponse(id=entity_id))


class QueryHandler(RequestHandler[TQuery, TResponse]):
    """Handler for reads."""

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory


class PagedListQueryHandler(
    RequestHandler[TPagedQuery, PagedList[TItem]],
    Generic[TPagedQuery, TAggregate, TItem],
):
    """Handler for paged reads of one aggregate type.

    Validates the filter against the specification's sort fields and the
    configured limits, reads one page in a fresh unit of work, and maps
    each aggregate to its item DTO.

    Subclasses set aggregate_type and implement map_item(); they may pass a
    query configuration and specification.

    Args:
        uow_factory: Builds a unit of work per request.
        query_configuration: Load shape of the aggregate.
        specification: Search/sort declarations of the aggregate.
        settings: Limits for filter validation (process settings by default).
    """

    aggregate_type: type[Any]

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        query_configuration: Any | None = None,
        specification: Specification[Any] | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._query_configuration = query_configuration
        self._specification = specification or Specification()
        self._validator = FilterValidator.for_specification(
            self._specification, settings
        )

    @abstractmethod
    def map_item(self, aggregate: TAggregate) -> TItem:
        """Map one aggregate to the item type returned in the page."""

    def read_repository(
        self, uow: UnitOfWorkProtocol
    ) -> ReadRepositoryProtocol[TAggregate, Any]:
        return uow.read_repository(
            self.aggregate_type,
            query_configuration=self._query_configuration,
            specification=self._specification,
        )

    async def handle(
        self, request: TPagedQuery, ctx: RequestContext
    ) -> Result[PagedList[TItem], ApplicationError]:
        errors = self._validator.validate(request.filter)
        if errors:
            return self.invalid(errors)

        async with self._uow_factory(ctx) as uow:
            page = await self.read_repository(uow).get_paged(ctx, request.filter)
        return self.success(page.map(self.map_item))
