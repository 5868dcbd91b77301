"""Well-known role names shared by every service.

Roles are issued by the identity service and arrive on the request context.
Only GLOBAL_ADMIN changes data-access behavior in the building blocks: it is
the elevated, cross-tenant role that bypasses tenant scoping.

Scopes:
    - GLOBAL: platform-wide (all tenants)
    - TENANT: user management inside one tenant
    - APP: application features inside one tenant

Usage:
    from src.domain.enums import WellKnownRole

    ctx = RequestContext(user_id=uid, tenant_id=tid, roles=frozenset({WellKnownRole.APP_CONTRIBUTOR}))
"""

from enum import Enum


class WellKnownRole(str, Enum):
    """Well-known role names used for authorization.

    String Enum:
        Values are the dotted names carried in identity tokens, so roles can
        be compared against raw claim strings.
    """

    GLOBAL_ADMIN = "Global.Admin"  # Full platform access across all tenants
    TENANT_ADMIN = "Tenant.Admin"  # User management within a tenant
    APP_ADMIN = "App.Admin"  # Full application access within a tenant
    APP_CONTRIBUTOR = "App.Contributor"  # Read/write application access (default role)
    APP_OBSERVER = "App.Observer"  # Read-only application access


ELEVATED_ROLES: frozenset[str] = frozenset({WellKnownRole.GLOBAL_ADMIN.value})
"""Roles that bypass tenant scoping."""
