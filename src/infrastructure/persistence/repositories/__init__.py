"""Generic repository implementations and the outbox repository.

Usage:
    from src.infrastructure.persistence.repositories import ReadRepository, WriteRepository
"""

from src.infrastructure.persistence.repositories.outbox_repository import (
    SqlAlchemyOutboxRepository,
)
from src.infrastructure.persistence.repositories.read_repository import (
    ReadRepository,
    scope_to_tenant,
)
from src.infrastructure.persistence.repositories.write_repository import (
    WriteRepository,
)

__all__ = [
    "ReadRepository",
    "SqlAlchemyOutboxRepository",
    "WriteRepository",
    "scope_to_tenant",
]
