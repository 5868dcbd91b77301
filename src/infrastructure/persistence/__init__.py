"""SQLAlchemy persistence for the building blocks.

Importing this package registers every infrastructure table (the outbox)
on BaseModel.metadata.
"""

from src.infrastructure.persistence.base import BaseModel, BaseMutableModel
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.mixins import (
    AuditMixin,
    DomainEventsMixin,
    TenantMixin,
)
from src.infrastructure.persistence.unit_of_work import (
    SqlAlchemyUnitOfWork,
    SqlAlchemyUnitOfWorkFactory,
)

__all__ = [
    "AuditMixin",
    "BaseModel",
    "BaseMutableModel",
    "Database",
    "DomainEventsMixin",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyUnitOfWorkFactory",
    "TenantMixin",
]
