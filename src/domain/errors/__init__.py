"""Domain errors package.

Usage:
    from src.domain.errors import InvalidSortFieldError, PagingError, TenantAccessError
"""

from src.domain.errors.paging_error import PagingError
from src.domain.errors.repository_error import InvalidSortFieldError, TenantAccessError

__all__ = [
    "InvalidSortFieldError",
    "PagingError",
    "TenantAccessError",
]
