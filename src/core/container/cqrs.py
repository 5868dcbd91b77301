"""Request dispatch factories.

The registry is a process-wide singleton. Services register their handlers
at startup; the first get_dispatcher() call freezes it.

Usage:
    registry = get_request_registry()
    registry.register(CreateTask, CreateTaskHandler(get_unit_of_work_factory()))

    result = await get_dispatcher().send(CreateTask(code="T-1", title="Ship"), ctx)
"""

from functools import lru_cache

from src.application.cqrs import (
    Dispatcher,
    LoggingBehavior,
    RequestRegistry,
    ValidationBehavior,
)
from src.core.container.infrastructure import get_logger


@lru_cache()
def get_request_registry() -> RequestRegistry:
    """Get the request registry singleton (app-scoped)."""
    return RequestRegistry()


@lru_cache()
def get_dispatcher() -> Dispatcher:
    """Get the dispatcher singleton (app-scoped), freezing the registry.

    Pipeline (outermost first): logging, then validation.
    """
    registry = get_request_registry()
    registry.freeze()
    return Dispatcher(
        registry,
        behaviors=(LoggingBehavior(get_logger()), ValidationBehavior(registry)),
    )
