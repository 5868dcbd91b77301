"""Request dispatcher.

Resolves the registered handler for a request's exact type and runs it
through the behavior pipeline.

Usage:
    from src.core.container import get_dispatcher

    result = await get_dispatcher().send(CreateTask(code="T-1", title="Ship"), ctx)
    match result:
        case Success(value=created):
            ...
        case Failure(error=error):
            ...
"""

import functools
from collections.abc import Sequence
from typing import Any, TypeVar

from src.application.cqrs.behaviors import NextStep, PipelineBehavior
from src.application.cqrs.registry import RequestRegistry
from src.application.cqrs.requests import Request
from src.application.errors import ApplicationError
from src.core.result import Result
from src.domain.value_objects.request_context import RequestContext

TResponse = TypeVar("TResponse")


class Dispatcher:
    """Send requests to their handlers.

    Args:
        registry: Request type -> handler mapping.
        behaviors: Pipeline behaviors, outermost first.
    """

    def __init__(
        self,
        registry: RequestRegistry,
        behaviors: Sequence[PipelineBehavior] = (),
    ) -> None:
        self._registry = registry
        self._behaviors = tuple(behaviors)

    async def send(
        self, request: Request[TResponse], ctx: RequestContext
    ) -> Result[TResponse, ApplicationError]:
        """Handle one request for one caller.

        Raises:
            HandlerNotFoundError: If no handler is registered for the request.
        """
        handler = self._registry.resolve(type(request))

        async def invoke() -> Result[Any, ApplicationError]:
            return await handler.handle(request, ctx)

        step: NextStep = invoke
        for behavior in reversed(self._behaviors):
            step = functools.partial(behavior, request, ctx, step)
        return await step()
