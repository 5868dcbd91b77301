"""Command and query contracts.

Requests are immutable data containers that declare their response type at
the type level. Handlers execute the logic and return Result types.

Pattern:
- Frozen, keyword-only dataclasses (subclasses MUST also be frozen)
- Past-tense events, imperative commands (CreateTask), noun queries (GetTask)
- One handler per request type, resolved through the RequestRegistry

Hierarchy:
    Command                      -> Result[None, ApplicationError]
    ResponseCommand[T]           -> Result[T, ApplicationError]
    CreateCommand[TId]           -> Result[CreateCommandResponse[TId], ApplicationError]
    Query[T]                     -> Result[T, ApplicationError]
    PagedListQuery[TFilter, T]   -> Result[PagedList[T], ApplicationError]

Example:
    >>> @dataclass(frozen=True, kw_only=True)
    ... class CreateTask(CreateCommand[UUID]):
    ...     code: str
    ...     title: str
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

from src.domain.value_objects.filter import Filter
from src.domain.value_objects.paged_list import PagedList

TResponse = TypeVar("TResponse")
TId = TypeVar("TId")
TFilter = TypeVar("TFilter", bound=Filter)
TItem = TypeVar("TItem")


@dataclass(frozen=True, kw_only=True)
class Request(Generic[TResponse]):
    """Base of every command and query."""


@dataclass(frozen=True, kw_only=True)
class Command(Request[None]):
    """State change that returns no payload on success."""


@dataclass(frozen=True, kw_only=True)
class ResponseCommand(Request[TResponse]):
    """State change that returns a payload on success."""


@dataclass(frozen=True, kw_only=True)
class CreateCommandResponse(Generic[TId]):
    """Uniform payload of every successful create.

    Attributes:
        id: Identifier assigned to the new aggregate.
    """

    id: TId


@dataclass(frozen=True, kw_only=True)
class CreateCommand(ResponseCommand[CreateCommandResponse[TId]]):
    """Creation of one aggregate; succeeds with its new identifier."""


@dataclass(frozen=True, kw_only=True)
class Query(Request[TResponse]):
    """Side-effect free read."""


@dataclass(frozen=True, kw_only=True)
class PagedListQuery(Query[PagedList[TItem]], Generic[TFilter, TItem]):
    """Search/sort/paged read of one aggregate type.

    Attributes:
        filter: Search, sort and paging parameters.
    """

    filter: TFilter
