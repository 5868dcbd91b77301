"""Paging and search parameter error messages.

Message constants used by the filter validator when it returns
ValidationError values. Templates take keyword arguments via str.format.

Usage:
    from src.domain.errors import PagingError

    message = PagingError.PAGE_SIZE_TOO_LARGE.format(max_page_size=50)
"""


class PagingError:
    """Paging error message constants.

    These are NOT exceptions. They are message templates placed in
    ValidationError values returned inside Failure results.
    """

    PAGE_SIZE_TOO_SMALL = "Page size must be at least {min_page_size}."
    PAGE_SIZE_TOO_LARGE = "Page size must not exceed {max_page_size}."
    PAGE_NUMBER_TOO_SMALL = "Page number must be at least 1."
    INVALID_SORT_DIRECTION = "Sort direction must be 'asc' or 'desc'."
    INVALID_SORT_FIELD = "Invalid sort field '{sort_field}'. Valid fields: {valid_fields}."
    SEARCH_TERM_TOO_LONG = "Search term must not exceed {max_length} characters."
