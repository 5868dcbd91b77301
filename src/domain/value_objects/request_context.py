"""Request-scoped caller context.

The identity layer builds one RequestContext per request and passes it
explicitly to every handler and repository call. Repositories use it to
enforce tenant scoping; the unit of work uses it to stamp audit columns.

Nothing reads the caller's identity from ambient state: a call without a
context cannot touch data.

Usage:
    from src.domain.value_objects import RequestContext

    ctx = RequestContext(
        user_id=user_id,
        username="alice",
        tenant_id=tenant_id,
        roles=frozenset({"App.Contributor"}),
    )
    task = await read_repo.get_by_id(ctx, task_id)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self
from uuid import UUID

from src.core.constants import SYSTEM_USERNAME
from src.domain.enums.well_known_role import ELEVATED_ROLES


@dataclass(frozen=True, slots=True, kw_only=True)
class RequestContext:
    """Identity of the caller for a single request.

    Attributes:
        user_id: Authenticated user, None for anonymous or system callers.
        username: Display name used for audit stamping.
        tenant_id: Tenant the caller belongs to, None when untenanted.
        roles: Role names granted to the caller.
        is_system: True for internal jobs (outbox processor, seeders).
    """

    user_id: UUID | None = None
    username: str | None = None
    tenant_id: UUID | None = None
    roles: frozenset[str] = field(default_factory=frozenset)
    is_system: bool = False

    def __post_init__(self) -> None:
        """Store roles as plain strings so enum members and claim strings compare equal."""
        object.__setattr__(
            self, "roles", frozenset(_role_name(role) for role in self.roles)
        )

    @classmethod
    def system(cls) -> Self:
        """Context for internal processes that act across tenants."""
        return cls(username=SYSTEM_USERNAME, is_system=True)

    @classmethod
    def anonymous(cls) -> Self:
        """Context for an unauthenticated caller (sees no tenant data)."""
        return cls()

    @property
    def is_authenticated(self) -> bool:
        """True when the caller is a known user or the system."""
        return self.user_id is not None or self.is_system

    @property
    def is_elevated(self) -> bool:
        """True when the caller may read and write across tenants."""
        return self.is_system or not ELEVATED_ROLES.isdisjoint(self.roles)

    @property
    def audit_name(self) -> str:
        """Name written to created_by/updated_by columns."""
        return self.username or SYSTEM_USERNAME

    def has_role(self, role: str) -> bool:
        """Check whether the caller holds a role."""
        return _role_name(role) in self.roles

    def can_access_tenant(self, tenant_id: UUID | None) -> bool:
        """Check whether a row owned by tenant_id is visible to the caller.

        Args:
            tenant_id: Owning tenant of the row.

        Returns:
            True for elevated callers, or when the row belongs to the
            caller's own tenant. An untenanted, non-elevated caller can
            access no tenant's rows.
        """
        if self.is_elevated:
            return True
        return self.tenant_id is not None and tenant_id == self.tenant_id


def _role_name(role: str) -> str:
    if isinstance(role, Enum):
        return str(role.value)
    return role
