"""Repository contract violations.

Unlike domain error values, these are raised: each one signals a caller
defect that a Result cannot meaningfully carry (a request built against
fields the aggregate does not expose, or a write aimed at another tenant).
"""

from collections.abc import Sequence
from uuid import UUID


class InvalidSortFieldError(ValueError):
    """Sort field is not one of the aggregate's public sort fields.

    Attributes:
        sort_field: Field name the caller requested.
        valid_fields: Public sort field names the aggregate supports.
    """

    def __init__(self, sort_field: str, valid_fields: Sequence[str]) -> None:
        self.sort_field = sort_field
        self.valid_fields = tuple(valid_fields)
        listed = ", ".join(self.valid_fields) or "(none)"
        super().__init__(
            f"Invalid sort field '{sort_field}'. Valid fields: {listed}."
        )


class TenantAccessError(PermissionError):
    """Write targets a row owned by a tenant the caller cannot access.

    Attributes:
        entity_type: Aggregate class name.
        tenant_id: Owning tenant of the row.
    """

    def __init__(self, entity_type: str, tenant_id: UUID | None) -> None:
        self.entity_type = entity_type
        self.tenant_id = tenant_id
        super().__init__(
            f"Caller cannot write {entity_type} owned by tenant {tenant_id}"
        )
