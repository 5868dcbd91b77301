"""Storage adapters for the generic repositories."""

from src.infrastructure.persistence.adapters.sqlalchemy_storage import (
    SqlAlchemyStorageAdapter,
)

__all__ = ["SqlAlchemyStorageAdapter"]
