"""In-process domain event dispatch.

Usage:
    from src.application.domain_events import (
        DomainEventDispatcher,
        DomainEventToOutboxHandler,
    )
"""

from src.application.domain_events.dispatcher import DomainEventDispatcher
from src.application.domain_events.outbox_handler import DomainEventToOutboxHandler

__all__ = ["DomainEventDispatcher", "DomainEventToOutboxHandler"]
