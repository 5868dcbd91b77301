"""Stable codes carried by DomainError.

Codes are snake_case strings on the wire (logs, API payloads) and grouped
by the failure type that normally carries them.
"""

from enum import Enum


class ErrorCode(Enum):
    """Machine-readable failure codes."""

    # ValidationError: filter and request input
    VALIDATION_FAILED = "validation_failed"
    INVALID_PAGE_SIZE = "invalid_page_size"
    INVALID_PAGE_NUMBER = "invalid_page_number"
    INVALID_SORT_FIELD = "invalid_sort_field"
    INVALID_SORT_DIRECTION = "invalid_sort_direction"
    SEARCH_TERM_TOO_LONG = "search_term_too_long"
    REQUIRED_FIELD_MISSING = "required_field_missing"

    # ValidationError: rejected by the database at commit
    COMMIT_CONSTRAINT_VIOLATION = "commit_constraint_violation"

    # NotFoundError
    RESOURCE_NOT_FOUND = "resource_not_found"

    # ConflictError
    RESOURCE_ALREADY_EXISTS = "resource_already_exists"
    RESOURCE_CONFLICT = "resource_conflict"

    # AuthenticationError / AuthorizationError
    AUTHENTICATION_FAILED = "authentication_failed"
    PERMISSION_DENIED = "permission_denied"
    TENANT_ACCESS_DENIED = "tenant_access_denied"
