"""Domain enums package.

Usage:
    from src.domain.enums import WellKnownRole
"""

from src.domain.enums.well_known_role import ELEVATED_ROLES, WellKnownRole

__all__ = ["ELEVATED_ROLES", "WellKnownRole"]
