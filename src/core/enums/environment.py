"""Deployment environment of the hosting service."""

from enum import Enum


class Environment(str, Enum):
    """Where the service runs; drives log rendering defaults."""

    DEVELOPMENT = "development"
    TESTING = "testing"
    CI = "ci"
    PRODUCTION = "production"

    @property
    def renders_json_logs(self) -> bool:
        """Machine-read environments log JSON; local development logs for humans."""
        return self is not Environment.DEVELOPMENT
