"""Per-aggregate search and sort declarations.

A Specification tells the generic read repository how one aggregate is
searched and sorted:

    - search_fields: attributes matched (case-insensitive substring) by
      Filter.search_by
    - sort_fields: public sort names mapped to attributes; lookups ignore case
    - default_sort: ordering applied when the caller asks for none, and
      appended after the caller's ordering
    - criteria(): extra equality filters derived from a Filter subclass

Usage:
    >>> class TaskSpecification(Specification[TaskFilter]):
    ...     search_fields = ("title", "code")
    ...     sort_fields = {"title": "title", "dueDate": "due_date"}
    ...     default_sort = (SortKey("created_at", descending=True),)
    ...
    ...     def criteria(self, filter: TaskFilter) -> dict[str, Any]:
    ...         if filter.project_id is None:
    ...             return {}
    ...         return {"project_id": filter.project_id}
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Generic, TypeVar

from src.domain.errors import InvalidSortFieldError
from src.domain.value_objects.filter import Filter
from src.domain.value_objects.sort_key import SortKey

TFilter = TypeVar("TFilter", bound=Filter)


class Specification(Generic[TFilter]):
    """Search, sort and criteria declarations for one aggregate.

    The base class declares nothing: no search, no public sort fields, and
    ordering by primary key only.
    """

    search_fields: ClassVar[tuple[str, ...]] = ()
    sort_fields: ClassVar[Mapping[str, str]] = {}
    default_sort: ClassVar[tuple[SortKey, ...]] = ()

    def criteria(self, filter: TFilter) -> dict[str, Any]:
        """Equality criteria derived from aggregate-specific filter fields."""
        return {}

    @property
    def valid_sort_fields(self) -> tuple[str, ...]:
        """Public sort field names, in declaration order."""
        return tuple(self.sort_fields)

    def resolve_sort_field(self, name: str) -> str | None:
        """Map a public sort name (any case) to its attribute.

        Returns:
            Attribute name, or None when the name is not a public sort field.
        """
        lowered = name.strip().lower()
        for public_name, attribute in self.sort_fields.items():
            if public_name.lower() == lowered:
                return attribute
        return None

    def is_valid_sort_field(self, name: str) -> bool:
        return self.resolve_sort_field(name) is not None

    def ordering(self, filter: Filter) -> list[SortKey]:
        """Build the ordering for a filter.

        The requested sort comes first, then the default sort terms that do
        not repeat it. The repository appends the primary key last.

        Raises:
            InvalidSortFieldError: If filter.sort_field is set but unknown.
        """
        keys: list[SortKey] = []
        if filter.sort_field:
            attribute = self.resolve_sort_field(filter.sort_field)
            if attribute is None:
                raise InvalidSortFieldError(filter.sort_field, self.valid_sort_fields)
            keys.append(SortKey(attribute, descending=filter.is_descending))

        used = {key.field for key in keys}
        keys.extend(key for key in self.default_sort if key.field not in used)
        return keys
