"""Failure types shared by every building block.

Which one to return:
    ValidationError: a field or business rule rejected the input, or a
        commit hit a non-unique constraint (NOT NULL, CHECK, foreign key).
    NotFoundError: the aggregate does not exist for this caller. Rows of
        another tenant are reported the same way.
    ConflictError: a unique key is already taken or the aggregate is in a
        state that forbids the change.
    AuthenticationError: no usable caller identity.
    AuthorizationError: the caller is known but lacks the permission.

Handlers convert all of them to ApplicationError kinds with
ApplicationError.from_domain_error().
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Rejected input.

    Attributes:
        field: Offending field name, None for whole-request rules.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Absent (or invisible) aggregate.

    Attributes:
        resource_type: Aggregate name (Task, Project...).
        resource_id: Identifier the caller asked for.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Duplicate key or incompatible aggregate state.

    Attributes:
        resource_type: Aggregate name, "record" when the database only
            reports a violated unique index.
        conflicting_field: Column or state attribute in conflict.
    """

    resource_type: str
    conflicting_field: str | None = None

    @classmethod
    def duplicate(
        cls, resource_type: str, conflicting_field: str | None = None
    ) -> "ConflictError":
        """Conflict for a value that must be unique."""
        return cls(
            code=ErrorCode.RESOURCE_ALREADY_EXISTS,
            message="A record with the same unique values already exists.",
            resource_type=resource_type,
            conflicting_field=conflicting_field,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Missing or unusable caller identity."""


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Caller lacks a permission.

    Attributes:
        required_permission: Role or permission that would have allowed it.
    """

    required_permission: str | None = None
