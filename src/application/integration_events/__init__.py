"""Integration event publishing and consumption services.

Usage:
    from src.application.integration_events import (
        IntegrationEventConsumer,
        IntegrationEventPublisher,
    )
"""

from src.application.integration_events.consumer import IntegrationEventConsumer
from src.application.integration_events.publisher import IntegrationEventPublisher

__all__ = ["IntegrationEventConsumer", "IntegrationEventPublisher"]
