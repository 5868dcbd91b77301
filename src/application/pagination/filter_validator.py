"""Filter validation ahead of paged reads.

The Filter itself only normalizes (page number and size can never drop
below 1). This validator enforces the configured limits and reports every
violation as a ValidationError, so handlers can return ValidationFailed
before touching a repository:

    - page size within [1, max_page_size] (no ceiling when unset)
    - sort direction "asc"/"desc" under the strict policy; the lenient
      policy accepts anything and sorts ascending unless it reads "desc"
    - search term no longer than max_search_length
    - sort field among the specification's public sort fields
"""

from collections.abc import Sequence

from src.core.config import Settings, get_settings
from src.core.constants import MIN_PAGE_SIZE, VALID_SORT_DIRECTIONS
from src.core.enums import ErrorCode, SortDirectionPolicy
from src.core.errors import ValidationError
from src.domain.errors import PagingError
from src.domain.specifications import Specification
from src.domain.value_objects.filter import Filter


class FilterValidator:
    """Validates filters against configured paging limits.

    Args:
        valid_sort_fields: Public sort field names (matched ignoring case).
            An empty sequence rejects every explicit sort field.
        settings: Settings supplying the limits (defaults to the process
            settings).
    """

    def __init__(
        self,
        valid_sort_fields: Sequence[str] = (),
        settings: Settings | None = None,
    ) -> None:
        config = settings or get_settings()
        self._valid_sort_fields = tuple(valid_sort_fields)
        self._valid_lookup = {name.lower() for name in self._valid_sort_fields}
        self._max_page_size = config.max_page_size
        self._max_search_length = config.max_search_length
        self._policy = config.sort_direction_policy

    @classmethod
    def for_specification(
        cls, specification: Specification, settings: Settings | None = None
    ) -> "FilterValidator":
        """Build a validator that accepts the specification's sort fields."""
        return cls(specification.valid_sort_fields, settings)

    def validate(self, filter: Filter) -> list[ValidationError]:
        """Check a filter against every rule.

        Returns:
            Validation errors, empty when the filter is valid.
        """
        errors: list[ValidationError] = []

        if filter.page_number < 1:
            errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_PAGE_NUMBER,
                    message=PagingError.PAGE_NUMBER_TOO_SMALL,
                    field="page_number",
                )
            )

        if filter.page_size < MIN_PAGE_SIZE:
            errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_PAGE_SIZE,
                    message=PagingError.PAGE_SIZE_TOO_SMALL.format(
                        min_page_size=MIN_PAGE_SIZE
                    ),
                    field="page_size",
                )
            )
        elif self._max_page_size is not None and filter.page_size > self._max_page_size:
            errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_PAGE_SIZE,
                    message=PagingError.PAGE_SIZE_TOO_LARGE.format(
                        max_page_size=self._max_page_size
                    ),
                    field="page_size",
                )
            )

        if (
            self._policy is SortDirectionPolicy.STRICT
            and filter.sort_direction
            and filter.sort_direction.lower() not in VALID_SORT_DIRECTIONS
        ):
            errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_SORT_DIRECTION,
                    message=PagingError.INVALID_SORT_DIRECTION,
                    field="sort_direction",
                )
            )

        if filter.search_by and len(filter.search_by) > self._max_search_length:
            errors.append(
                ValidationError(
                    code=ErrorCode.SEARCH_TERM_TOO_LONG,
                    message=PagingError.SEARCH_TERM_TOO_LONG.format(
                        max_length=self._max_search_length
                    ),
                    field="search_by",
                )
            )

        if filter.sort_field and filter.sort_field.lower() not in self._valid_lookup:
            errors.append(
                ValidationError(
                    code=ErrorCode.INVALID_SORT_FIELD,
                    message=PagingError.INVALID_SORT_FIELD.format(
                        sort_field=filter.sort_field,
                        valid_fields=", ".join(self._valid_sort_fields) or "(none)",
                    ),
                    field="sort_field",
                )
            )

        return errors
