"""Command/query contracts, handlers and dispatch.

Usage:
    from src.application.cqrs import CreateCommand, CreateCommandHandler, Dispatcher
"""

from src.application.cqrs.behaviors import (
    LoggingBehavior,
    PipelineBehavior,
    ValidationBehavior,
)
from src.application.cqrs.dispatcher import Dispatcher
from src.application.cqrs.handlers import (
    CommandHandler,
    CreateCommandHandler,
    PagedListQueryHandler,
    QueryHandler,
    RequestHandler,
    ResponseCommandHandler,
)
from src.application.cqrs.metadata import (
    RequestKind,
    RequestMetadata,
    get_handler_factory_name,
)
from src.application.cqrs.registry import (
    HandlerNotFoundError,
    RequestRegistry,
    RequestValidator,
)
from src.application.cqrs.requests import (
    Command,
    CreateCommand,
    CreateCommandResponse,
    PagedListQuery,
    Query,
    Request,
    ResponseCommand,
)

__all__ = [
    # Contracts
    "Command",
    "CreateCommand",
    "CreateCommandResponse",
    "PagedListQuery",
    "Query",
    "Request",
    "ResponseCommand",
    # Handlers
    "CommandHandler",
    "CreateCommandHandler",
    "PagedListQueryHandler",
    "QueryHandler",
    "RequestHandler",
    "ResponseCommandHandler",
    # Dispatch
    "Dispatcher",
    "HandlerNotFoundError",
    "LoggingBehavior",
    "PipelineBehavior",
    "RequestKind",
    "RequestMetadata",
    "RequestRegistry",
    "RequestValidator",
    "ValidationBehavior",
    "get_handler_factory_name",
]
