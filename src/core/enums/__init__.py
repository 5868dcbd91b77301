"""Enums shared by configuration and error handling."""

from src.core.enums.environment import Environment
from src.core.enums.error_code import ErrorCode
from src.core.enums.sort_direction_policy import SortDirectionPolicy

__all__ = ["Environment", "ErrorCode", "SortDirectionPolicy"]
