"""Search, sort and pagination parameters for paged reads.

Filter is a mutable parameter object built once per request. Its setters
normalize input so the paging invariant holds after any sequence of
assignments:

    page_number >= 1 and page_size >= 1

String parameters are trimmed but never collapsed: an empty string stays
distinct from None. Consumers treat blank strings as absent (no search, no
explicit sort).

Usage:
    >>> f = Filter(search_by="  report ", page_number=0, page_size=-5)
    >>> f.search_by, f.page_number, f.page_size
    ('report', 1, 10)

    >>> class TaskFilter(Filter):
    ...     def __init__(self, *, project_id: UUID | None = None, **kwargs):
    ...         super().__init__(**kwargs)
    ...         self.project_id = project_id
"""

from src.core.config import settings
from src.core.constants import DEFAULT_PAGE_NUMBER, SORT_DESCENDING


class Filter:
    """Caller-supplied search/sort/paging parameters.

    Args:
        search_by: Free-text search term (trimmed).
        sort_field: Public sort field name (trimmed).
        sort_direction: "asc" or "desc" (trimmed, case-insensitive).
        page_number: 1-based page; values below 1 become 1.
        page_size: Items per page; None or values below 1 become the
            default page size.
        default_page_size: Override for the configured default page size.

    Raises:
        ValueError: If default_page_size is below 1.
    """

    def __init__(
        self,
        *,
        search_by: str | None = None,
        sort_field: str | None = None,
        sort_direction: str | None = None,
        page_number: int = DEFAULT_PAGE_NUMBER,
        page_size: int | None = None,
        default_page_size: int | None = None,
    ) -> None:
        resolved_default = (
            settings.default_page_size
            if default_page_size is None
            else default_page_size
        )
        if resolved_default < 1:
            raise ValueError("default_page_size must be at least 1")
        self._default_page_size = resolved_default

        self._search_by: str | None = None
        self._sort_field: str | None = None
        self._sort_direction: str | None = None
        self._page_number = DEFAULT_PAGE_NUMBER
        self._page_size = resolved_default

        self.search_by = search_by
        self.sort_field = sort_field
        self.sort_direction = sort_direction
        self.page_number = page_number
        self.page_size = page_size

    @property
    def search_by(self) -> str | None:
        return self._search_by

    @search_by.setter
    def search_by(self, value: str | None) -> None:
        self._search_by = _trim(value)

    @property
    def sort_field(self) -> str | None:
        return self._sort_field

    @sort_field.setter
    def sort_field(self, value: str | None) -> None:
        self._sort_field = _trim(value)

    @property
    def sort_direction(self) -> str | None:
        return self._sort_direction

    @sort_direction.setter
    def sort_direction(self, value: str | None) -> None:
        self._sort_direction = _trim(value)

    @property
    def page_number(self) -> int:
        return self._page_number

    @page_number.setter
    def page_number(self, value: int) -> None:
        self._page_number = DEFAULT_PAGE_NUMBER if value < 1 else value

    @property
    def page_size(self) -> int:
        return self._page_size

    @page_size.setter
    def page_size(self, value: int | None) -> None:
        if value is None or value < 1:
            value = self._default_page_size
        self._page_size = value

    @property
    def default_page_size(self) -> int:
        """Page size substituted for missing or invalid sizes."""
        return self._default_page_size

    @property
    def has_search(self) -> bool:
        """True when a non-blank search term was supplied."""
        return bool(self._search_by)

    @property
    def has_sort_field(self) -> bool:
        """True when a non-blank sort field was supplied."""
        return bool(self._sort_field)

    @property
    def is_descending(self) -> bool:
        """True only for "desc" (case-insensitive); anything else sorts ascending."""
        return (self._sort_direction or "").lower() == SORT_DESCENDING

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(search_by={self._search_by!r}, "
            f"sort_field={self._sort_field!r}, sort_direction={self._sort_direction!r}, "
            f"page_number={self._page_number}, page_size={self._page_size})"
        )


def _trim(value: str | None) -> str | None:
    return None if value is None else value.strip()
