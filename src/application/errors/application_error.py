"""Application layer error types.

This module defines application-level errors that wrap domain errors and add
application-specific context (command/query handler failures). Every handler
result carries an ApplicationError on its failure branch, so the boundary
layer maps one small set of kinds to status codes or exit codes.

Exports:
    ApplicationErrorCode: Application-level error kind enum
    ApplicationError: Application layer error dataclass
"""

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)


class ApplicationErrorCode(Enum):
    """Application-level error kinds.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Task 42 was not found",
        ... )
    """

    VALIDATION_FAILED = "validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Wraps domain errors with application-specific context. Used by command and
    query handlers to provide structured error information to the presentation layer.

    Attributes:
        code: Application error kind (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs (field -> message for
            validation failures)

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.VALIDATION_FAILED,
        ...     message="Validation failed",
        ...     details={"page_size": "Page size must not exceed 50."},
        ... )
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None

    @classmethod
    def from_domain_error(cls, error: DomainError) -> "ApplicationError":
        """Classify a domain error into an application error kind.

        Args:
            error: Domain error returned by a repository or unit of work.

        Returns:
            ApplicationError carrying the original error.
        """
        match error:
            case ValidationError():
                code = ApplicationErrorCode.VALIDATION_FAILED
            case NotFoundError():
                code = ApplicationErrorCode.NOT_FOUND
            case ConflictError():
                code = ApplicationErrorCode.CONFLICT
            case AuthenticationError():
                code = ApplicationErrorCode.UNAUTHORIZED
            case AuthorizationError():
                code = ApplicationErrorCode.FORBIDDEN
            case _:
                code = ApplicationErrorCode.UNEXPECTED
        return cls(
            code=code,
            message=error.message,
            domain_error=error,
            details=error.details,
        )

    @classmethod
    def from_validation_errors(
        cls, errors: Sequence[ValidationError]
    ) -> "ApplicationError":
        """Combine validation errors into one VALIDATION_FAILED error.

        Args:
            errors: At least one validation error.

        Returns:
            ApplicationError whose details map field names to messages.
        """
        details = {(error.field or "request"): error.message for error in errors}
        return cls(
            code=ApplicationErrorCode.VALIDATION_FAILED,
            message="; ".join(error.message for error in errors),
            domain_error=errors[0] if len(errors) == 1 else None,
            details=details,
        )

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
