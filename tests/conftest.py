"""Pytest configuration shared by unit and integration tests.

This configuration ensures:
1. Async tests are marked automatically
2. Integration tests get a fresh SQLite database file per test
3. Units of work are built with explicit test settings
4. Loggers are mocked (no structlog output during tests)
"""

import inspect
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from src.core.config import Settings
from src.domain.enums import WellKnownRole
from src.domain.value_objects import RequestContext
from src.infrastructure.messaging import JsonIntegrationEventSerializer
from src.infrastructure.persistence import Database, SqlAlchemyUnitOfWorkFactory

# Register sample models on BaseModel.metadata before create_all().
import tests.utils.todo_sample  # noqa: F401

pytest_plugins = ("pytest_asyncio",)


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with a real (SQLite) database"
    )


# Test execution configuration
def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)


# =============================================================================
# Settings, logging, serialization
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings with the documented defaults, independent of the environment."""
    return Settings(
        environment="testing",
        default_page_size=10,
        max_page_size=50,
        max_export_size=5000,
        max_search_length=200,
        sort_direction_policy="lenient",
        outbox_max_retries=3,
    )


@pytest.fixture
def mock_logger() -> MagicMock:
    """Logger double whose bind() returns itself."""
    logger = MagicMock()
    logger.bind.return_value = logger
    return logger


@pytest.fixture
def serializer() -> JsonIntegrationEventSerializer:
    return JsonIntegrationEventSerializer()


# =============================================================================
# Request contexts
# =============================================================================


@pytest.fixture
def tenant_a_ctx() -> RequestContext:
    return RequestContext(
        user_id=uuid7(),
        username="alice",
        tenant_id=uuid7(),
        roles=frozenset({WellKnownRole.APP_CONTRIBUTOR}),
    )


@pytest.fixture
def tenant_b_ctx() -> RequestContext:
    return RequestContext(
        user_id=uuid7(),
        username="bob",
        tenant_id=uuid7(),
        roles=frozenset({WellKnownRole.APP_CONTRIBUTOR}),
    )


@pytest.fixture
def admin_ctx() -> RequestContext:
    return RequestContext(
        user_id=uuid7(),
        username="root",
        roles=frozenset({WellKnownRole.GLOBAL_ADMIN}),
    )


# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh SQLite database file with every registered table."""
    db = Database(database_url=f"sqlite+aiosqlite:///{tmp_path / 'blocks.db'}")
    await db.create_all()
    yield db
    await db.close()


@pytest.fixture
def uow_factory(database, serializer, mock_logger, test_settings):
    return SqlAlchemyUnitOfWorkFactory(
        database=database,
        serializer=serializer,
        logger=mock_logger,
        settings=test_settings,
    )
