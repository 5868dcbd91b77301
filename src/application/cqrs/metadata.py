"""CQRS Metadata Types.

Dataclasses and enums describing registry entries.

Design Principles:
- Immutable (frozen=True) - registry entries never change at runtime
- Type-safe (kw_only=True) - explicit field assignment
- Self-documenting - clear field names and docstrings
"""

from dataclasses import dataclass
from enum import Enum

from src.application.cqrs.requests import Command, Query, Request, ResponseCommand


class RequestKind(str, Enum):
    """Whether a request changes state or only reads it."""

    COMMAND = "command"
    QUERY = "query"

    @classmethod
    def of(cls, request_class: type) -> "RequestKind":
        """Classify a request class by its contract base.

        Raises:
            TypeError: If request_class is not a command or query.
        """
        if issubclass(request_class, (Command, ResponseCommand)):
            return cls.COMMAND
        if issubclass(request_class, Query):
            return cls.QUERY
        if issubclass(request_class, Request):
            raise TypeError(
                f"{request_class.__name__} must derive from Command, "
                "ResponseCommand, CreateCommand or Query"
            )
        raise TypeError(f"{request_class.__name__} is not a request type")


@dataclass(frozen=True, kw_only=True)
class RequestMetadata:
    """Metadata for a request in the registry.

    Attributes:
        request_class: The request dataclass (e.g., CreateTask).
        handler_class: Class of the registered handler instance.
        kind: Command or query.
        description: Human-readable description for documentation.

    Example:
        >>> RequestMetadata(
        ...     request_class=CreateTask,
        ...     handler_class=CreateTaskHandler,
        ...     kind=RequestKind.COMMAND,
        ...     description="Create a task in the caller's tenant",
        ... )
    """

    request_class: type
    handler_class: type
    kind: RequestKind
    description: str = ""


def get_handler_factory_name(metadata: RequestMetadata) -> str:
    """Compute the conventional container factory name for a handler.

    Example:
        >>> get_handler_factory_name(metadata)  # request_class=CreateTask
        'get_create_task_handler'
    """
    class_name = metadata.request_class.__name__

    # Convert PascalCase to snake_case
    snake_case = ""
    for i, char in enumerate(class_name):
        if char.isupper() and i > 0:
            snake_case += "_"
        snake_case += char.lower()

    return f"get_{snake_case}_handler"
