"""DomainError: the failure payload carried by Failure results.

Expected failures (a duplicate code, a missing task, a page size over the
limit) are returned, not raised. Every such failure is a frozen dataclass
deriving from DomainError so repositories, the unit of work and handlers can
pattern-match on the subtype and read a stable ErrorCode.

Raised exceptions are reserved for defects (see ResultAccessError,
InvalidSortFieldError, TenantAccessError).

Usage:
    from src.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class TaskLockedError(DomainError):
        task_id: str
"""

from dataclasses import dataclass
from typing import Any

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Expected failure value (not an Exception subclass).

    Attributes:
        code: Stable machine-readable code.
        message: Text safe to show to the caller.
        details: Extra string context (field -> message, constraint name...).
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def log_fields(self) -> dict[str, Any]:
        """Structured logging context for this failure."""
        fields: dict[str, Any] = {
            "error_code": self.code.value,
            "error_type": type(self).__name__,
        }
        if self.details:
            fields["error_details"] = self.details
        return fields

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
