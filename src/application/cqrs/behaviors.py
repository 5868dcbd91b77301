"""Request pipeline behaviors.

Behaviors wrap handler execution in the dispatcher, outermost first. Each
receives the request, the caller context, and a zero-argument callable that
runs the rest of the pipeline.

Behaviors:
    - LoggingBehavior: logs timing and outcome; defects are logged and
      re-raised, cancellation passes through
    - ValidationBehavior: runs registered validators and short-circuits with
      a VALIDATION_FAILED result
"""

import asyncio
import time
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from src.application.cqrs.registry import RequestRegistry
from src.application.errors import ApplicationError
from src.core.errors import ValidationError
from src.core.result import Failure, Result, is_failure
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.request_context import RequestContext

NextStep = Callable[[], Awaitable[Result[Any, ApplicationError]]]


class PipelineBehavior(Protocol):
    """One stage of the request pipeline."""

    async def __call__(
        self, request: Any, ctx: RequestContext, next_step: NextStep
    ) -> Result[Any, ApplicationError]: ...


class ValidationBehavior:
    """Run the request's registered validators before its handler."""

    def __init__(self, registry: RequestRegistry) -> None:
        self._registry = registry

    async def __call__(
        self, request: Any, ctx: RequestContext, next_step: NextStep
    ) -> Result[Any, ApplicationError]:
        errors: list[ValidationError] = []
        for validator in self._registry.validators_for(type(request)):
            errors.extend(validator.validate(request))
        if errors:
            return Failure(error=ApplicationError.from_validation_errors(errors))
        return await next_step()


class LoggingBehavior:
    """Log every request's duration and outcome."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def __call__(
        self, request: Any, ctx: RequestContext, next_step: NextStep
    ) -> Result[Any, ApplicationError]:
        log = self._logger.bind(
            request_type=type(request).__name__,
            tenant_id=str(ctx.tenant_id) if ctx.tenant_id else None,
            user_id=str(ctx.user_id) if ctx.user_id else None,
        )
        log.debug("request_started")
        started = time.perf_counter()

        try:
            result = await next_step()
        except asyncio.CancelledError:
            log.info("request_cancelled", elapsed_ms=_elapsed_ms(started))
            raise
        except Exception as e:
            log.error("request_crashed", error=e, elapsed_ms=_elapsed_ms(started))
            raise

        if is_failure(result):
            log.warning(
                "request_failed",
                error_code=result.error.code.value,
                error_message=result.error.message,
                elapsed_ms=_elapsed_ms(started),
            )
        else:
            log.info("request_handled", elapsed_ms=_elapsed_ms(started))
        return result


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
