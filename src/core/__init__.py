"""Shared kernel: Result, failure values and settings.

Imported by every other layer; imports none of them.
"""

from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.enums import ErrorCode
from src.core.result import (
    Failure,
    Result,
    ResultAccessError,
    Success,
    is_failure,
    is_success,
)

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "ConflictError",
    "DomainError",
    "ErrorCode",
    "Failure",
    "NotFoundError",
    "Result",
    "ResultAccessError",
    "Success",
    "ValidationError",
    "is_failure",
    "is_success",
]
