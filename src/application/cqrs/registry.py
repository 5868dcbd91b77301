"""Request registry: the single map from request type to handler.

The container builds one registry at process start, registers every
handler (and any validators), then freezes it. Resolution is an exact type
lookup: no reflection, no subclass matching.

Adding a request:
1. Define the request dataclass (Command/CreateCommand/Query subclass)
2. Write its handler
3. Register both in the container's registry factory
4. Run tests - unregistered requests raise HandlerNotFoundError on send
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from src.application.cqrs.handlers import RequestHandler
from src.application.cqrs.metadata import RequestKind, RequestMetadata
from src.core.errors import ValidationError


class HandlerNotFoundError(LookupError):
    """No handler is registered for a request type (wiring defect)."""

    def __init__(self, request_type: type) -> None:
        self.request_type = request_type
        super().__init__(f"No handler registered for {request_type.__name__}")


class RequestValidator(Protocol):
    """Validator run by the dispatcher before the handler."""

    def validate(self, request: Any) -> Sequence[ValidationError]:
        """Return validation errors, empty when the request is valid."""
        ...


@dataclass(frozen=True, kw_only=True)
class _Registration:
    handler: RequestHandler[Any, Any]
    validators: tuple[RequestValidator, ...]
    metadata: RequestMetadata


class RequestRegistry:
    """Explicit request type -> handler mapping.

    Example:
        >>> registry = RequestRegistry()
        >>> registry.register(CreateTask, CreateTaskHandler(uow_factory))
        >>> registry.freeze()
        >>> handler = registry.resolve(CreateTask)
    """

    def __init__(self) -> None:
        self._registrations: dict[type, _Registration] = {}
        self._frozen = False

    def register(
        self,
        request_type: type,
        handler: RequestHandler[Any, Any],
        *,
        validators: Sequence[RequestValidator] = (),
        description: str = "",
    ) -> None:
        """Register the one handler for a request type.

        Raises:
            ValueError: If request_type already has a handler.
            RuntimeError: If the registry is frozen.
            TypeError: If request_type is not a command or query.
        """
        if self._frozen:
            raise RuntimeError("Registry is frozen; register handlers at startup")
        if request_type in self._registrations:
            existing = self._registrations[request_type].metadata.handler_class
            raise ValueError(
                f"{request_type.__name__} is already handled by {existing.__name__}"
            )
        self._registrations[request_type] = _Registration(
            handler=handler,
            validators=tuple(validators),
            metadata=RequestMetadata(
                request_class=request_type,
                handler_class=type(handler),
                kind=RequestKind.of(request_type),
                description=description,
            ),
        )

    def freeze(self) -> None:
        """Reject further registrations."""
        self._frozen = True

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    def resolve(self, request_type: type) -> RequestHandler[Any, Any]:
        """Return the handler for a request type.

        Raises:
            HandlerNotFoundError: If nothing is registered for request_type.
        """
        return self._get(request_type).handler

    def validators_for(self, request_type: type) -> tuple[RequestValidator, ...]:
        return self._get(request_type).validators

    def metadata(self, request_type: type) -> RequestMetadata:
        return self._get(request_type).metadata

    def request_types(self, kind: RequestKind | None = None) -> list[type]:
        """Registered request types, optionally filtered by kind."""
        return [
            request_type
            for request_type, registration in self._registrations.items()
            if kind is None or registration.metadata.kind is kind
        ]

    def _get(self, request_type: type) -> _Registration:
        registration = self._registrations.get(request_type)
        if registration is None:
            raise HandlerNotFoundError(request_type)
        return registration

    def __contains__(self, request_type: object) -> bool:
        return request_type in self._registrations

    def __len__(self) -> int:
        return len(self._registrations)

    def __iter__(self) -> Iterator[type]:
        return iter(self._registrations)
