"""Paging support shared by paged queries.

Usage:
    from src.application.pagination import FilterValidator
"""

from src.application.pagination.filter_validator import FilterValidator

__all__ = ["FilterValidator"]
