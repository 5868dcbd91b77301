"""Port for structured logging.

Handlers, repositories, the unit of work and the messaging components take a
LoggerProtocol in their constructors; the container supplies ConsoleAdapter.

Messages are snake_case event names; everything variable goes into keyword
context:

    logger.info("request_handled", request_type="CreateTask", elapsed_ms=12.4)
    logger.error("integration_event_publish_failed", error=e, event_type=name)

Level guide:
    debug: pipeline steps, per-message outbox progress
    info: handled requests, published messages
    warning: Failure results, rejected commits, retries
    error: publish failures, crashed handlers
    critical: the service cannot continue
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Structured logger with context binding."""

    def debug(self, message: str, /, **context: Any) -> None: ...

    def info(self, message: str, /, **context: Any) -> None: ...

    def warning(self, message: str, /, **context: Any) -> None: ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at error level.

        Args:
            message: Event name.
            error: Exception whose type and text are added to the context.
            **context: Key-value context.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None: ...

    def bind(self, **context: Any) -> LoggerProtocol:
        """Return a logger that adds ``context`` to every line; self is unchanged."""
        ...
