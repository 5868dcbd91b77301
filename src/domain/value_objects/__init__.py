"""Domain value objects.

Usage:
    from src.domain.value_objects import Filter, PagedList, RequestContext, SortKey
"""

from src.domain.value_objects.filter import Filter
from src.domain.value_objects.paged_list import PagedList
from src.domain.value_objects.request_context import RequestContext
from src.domain.value_objects.sort_key import SortKey

__all__ = ["Filter", "PagedList", "RequestContext", "SortKey"]
