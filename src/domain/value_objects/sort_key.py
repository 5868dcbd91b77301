"""Storage-agnostic ordering term."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SortKey:
    """One ordering term: an aggregate attribute and a direction.

    Attributes:
        field: Attribute name on the aggregate (not the public sort name).
        descending: Sort high to low when True.
    """

    field: str
    descending: bool = False
