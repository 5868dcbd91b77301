"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. Tunable limits (page sizes, outbox
batching) live in `src/core/config.py`; the values here are their defaults
and the fixed vocabulary shared across services.

Example:
    >>> from src.core.constants import SORT_DESCENDING, SYSTEM_USERNAME
    >>> direction = SORT_DESCENDING
"""

# =============================================================================
# Pagination Defaults
# =============================================================================

DEFAULT_PAGE_NUMBER: int = 1
"""First page number (pages are 1-based)."""

DEFAULT_PAGE_SIZE: int = 10
"""Page size used when a caller supplies none or a value below 1."""

MIN_PAGE_SIZE: int = 1
"""Smallest page size a query may request."""

MAX_PAGE_SIZE: int = 50
"""Default ceiling for page size on paged reads."""

MAX_EXPORT_SIZE: int = 5000
"""Default ceiling for rows returned by an unpaged export."""

MAX_SEARCH_LENGTH: int = 200
"""Default maximum length of a search term."""


# =============================================================================
# Sorting
# =============================================================================

SORT_ASCENDING: str = "asc"
SORT_DESCENDING: str = "desc"

VALID_SORT_DIRECTIONS: frozenset[str] = frozenset({SORT_ASCENDING, SORT_DESCENDING})


# =============================================================================
# Identity
# =============================================================================

SYSTEM_USERNAME: str = "system"
"""Username stamped on audit columns when the caller has none."""


# =============================================================================
# Messaging
# =============================================================================

MESSAGE_CONTENT_TYPE: str = "application/json"
"""Content type of serialized integration events."""

OUTBOX_MAX_RETRIES_PREFIX: str = "Max retries exceeded: "
"""Prefix recorded on outbox messages that are abandoned."""
