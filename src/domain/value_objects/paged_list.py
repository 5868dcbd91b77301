"""Immutable page of results with total-count metadata.

Usage:
    >>> page = PagedList(items=(a, b), total_count=12, page_number=1, page_size=2)
    >>> page.total_pages, page.has_next_page
    (6, True)
    >>> dto_page = page.map(TaskDto.from_entity)
"""

import math
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True, kw_only=True)
class PagedList(Generic[T]):
    """One page of an ordered result set.

    Attributes:
        items: Items on this page (at most page_size).
        total_count: Size of the full search-filtered result set.
        page_number: 1-based page number.
        page_size: Requested (effective) page size.
        sort_field: Public sort field applied, if any.
        sort_direction: Sort direction applied, if any.

    Raises:
        ValueError: If the page metadata is inconsistent with the items.
    """

    items: Sequence[T] = field(default_factory=tuple)
    total_count: int
    page_number: int
    page_size: int
    sort_field: str | None = None
    sort_direction: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))
        if self.page_number < 1:
            raise ValueError(f"page_number must be at least 1, got {self.page_number}")
        if self.page_size < 1:
            raise ValueError(f"page_size must be at least 1, got {self.page_size}")
        if len(self.items) > self.page_size:
            raise ValueError(
                f"page holds {len(self.items)} items but page_size is {self.page_size}"
            )
        if self.total_count < len(self.items):
            raise ValueError(
                f"total_count {self.total_count} is less than the "
                f"{len(self.items)} items on the page"
            )

    @classmethod
    def empty(cls, *, page_number: int = 1, page_size: int) -> "PagedList[T]":
        """Build a page with no items and a total count of zero."""
        return cls(items=(), total_count=0, page_number=page_number, page_size=page_size)

    @property
    def total_pages(self) -> int:
        """ceil(total_count / page_size); 0 when there are no results."""
        return math.ceil(self.total_count / self.page_size)

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.total_pages

    def map(self, mapper: Callable[[T], U]) -> "PagedList[U]":
        """Return a page of mapped items with identical metadata."""
        return PagedList(
            items=tuple(mapper(item) for item in self.items),
            total_count=self.total_count,
            page_number=self.page_number,
            page_size=self.page_size,
            sort_field=self.sort_field,
            sort_direction=self.sort_direction,
        )

    def metadata(self) -> dict[str, int | bool | str | None]:
        """Paging metadata for response envelopes and headers."""
        return {
            "page_number": self.page_number,
            "page_size": self.page_size,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
            "has_previous_page": self.has_previous_page,
            "has_next_page": self.has_next_page,
            "sort_field": self.sort_field,
            "sort_direction": self.sort_direction,
        }

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]
