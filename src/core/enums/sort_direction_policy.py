"""Policy for sort directions outside the asc/desc vocabulary.

- LENIENT: anything other than "desc" (case-insensitive) sorts ascending
- STRICT: anything other than "asc"/"desc" fails filter validation
"""

from enum import Enum


class SortDirectionPolicy(str, Enum):
    """How an unrecognized sort direction is treated."""

    LENIENT = "lenient"
    STRICT = "strict"
