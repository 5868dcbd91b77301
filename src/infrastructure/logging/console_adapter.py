"""structlog-backed LoggerProtocol implementation writing to stdout.

Renderers:
    - use_json=False: colored key=value lines for local development
    - use_json=True: one JSON object per line for log shippers

Log context in this library routinely carries UUIDs (tenant, user, event
ids), enums and Decimals; they are rendered as plain strings.

Structural implementation of LoggerProtocol (no inheritance).
"""

from __future__ import annotations

import logging
import sys
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID

import structlog

_STRINGIFIED = (UUID, Decimal)


class ConsoleAdapter:
    """Console logger.

    Args:
        use_json: Render JSON lines instead of the console renderer.
        level: Minimum level name, case-insensitive.
        service: Bound as ``service`` on every line when given.
    """

    def __init__(
        self,
        *,
        use_json: bool = False,
        level: str = "INFO",
        service: str | None = None,
    ) -> None:
        renderer = (
            structlog.processors.JSONRenderer()
            if use_json
            else structlog.dev.ConsoleRenderer(colors=True)
        )
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso", utc=True),
                stringify_values,
                renderer,
            ],
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(level.upper())
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
            cache_logger_on_first_use=True,
        )

        root = structlog.get_logger()
        self._logger = root.bind(service=service) if service else root

    def debug(self, message: str, /, **context: Any) -> None:
        self._logger.debug(message, **context)

    def info(self, message: str, /, **context: Any) -> None:
        self._logger.info(message, **context)

    def warning(self, message: str, /, **context: Any) -> None:
        self._logger.warning(message, **context)

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log at error level; ``error`` adds error_type and error_message."""
        self._logger.error(message, **_with_error(context, error))

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        self._logger.critical(message, **_with_error(context, error))

    def bind(self, **context: Any) -> ConsoleAdapter:
        """Adapter sharing configuration, with extra context on every line."""
        bound = ConsoleAdapter.__new__(ConsoleAdapter)
        bound._logger = self._logger.bind(**context)
        return bound


def stringify_values(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """structlog processor: render ids, enums, dates and Decimals as strings."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = str(value.value)
        elif isinstance(value, (datetime, date)):
            event_dict[key] = value.isoformat()
        elif isinstance(value, _STRINGIFIED):
            event_dict[key] = str(value)
    return event_dict


def _with_error(context: dict[str, Any], error: Exception | None) -> dict[str, Any]:
    if error is not None:
        context["error_type"] = type(error).__name__
        context["error_message"] = str(error)
    return context
