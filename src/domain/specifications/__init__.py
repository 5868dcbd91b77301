"""Aggregate search/sort specifications.

Usage:
    from src.domain.specifications import Specification
"""

from src.domain.specifications.specification import Specification

__all__ = ["Specification"]
