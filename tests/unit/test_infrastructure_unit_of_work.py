"""Unit tests for SqlAlchemyUnitOfWork with a mocked session.

Tests cover:
- Lifecycle (enter, double enter, close, use outside context)
- Commit success count and logging
- IntegrityError translation (unique -> Conflict, other -> Validation)
- Cancellation during commit rolls back and propagates
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from src.core.enums import ErrorCode
from src.core.errors import ConflictError, ValidationError
from src.core.result import is_failure
from src.domain.value_objects import RequestContext
from src.infrastructure.persistence.unit_of_work import SqlAlchemyUnitOfWork


class FakeDriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


@pytest.fixture
def session() -> MagicMock:
    session = MagicMock()
    session.new = []
    session.dirty = []
    session.deleted = []
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


@pytest.fixture
def uow(session, serializer, mock_logger) -> SqlAlchemyUnitOfWork:
    return SqlAlchemyUnitOfWork(
        session_factory=MagicMock(return_value=session),
        ctx=RequestContext(username="alice"),
        serializer=serializer,
        logger=mock_logger,
    )


@pytest.mark.unit
class TestUnitOfWorkLifecycle:
    """Test context management."""

    async def test_session_closed_on_exit(self, uow, session):
        async with uow:
            assert uow.session is session

        session.close.assert_awaited_once()
        with pytest.raises(RuntimeError, match="not active"):
            _ = uow.session

    async def test_double_enter_rejected(self, uow):
        async with uow:
            with pytest.raises(RuntimeError, match="already active"):
                await uow.__aenter__()

    async def test_close_without_commit_discards(self, uow, session):
        async with uow:
            pass

        session.commit.assert_not_awaited()


@pytest.mark.unit
class TestUnitOfWorkCommit:
    """Test commit outcomes."""

    async def test_commit_returns_affected_count(self, uow, session, mock_logger):
        session.new = [MagicMock(spec=[]), MagicMock(spec=[])]
        session.deleted = [MagicMock(spec=[])]

        async with uow:
            result = await uow.commit()

        assert result.value == 3
        session.commit.assert_awaited_once()
        mock_logger.debug.assert_called_with("unit_of_work_committed", affected=3)

    async def test_commit_stamps_audit_info(self, uow, session):
        created = MagicMock()
        modified = MagicMock()
        session.new = [created]
        session.dirty = [modified]
        session.is_modified.return_value = True

        async with uow:
            await uow.commit()

        created.set_created_info.assert_called_once_with("alice")
        modified.set_updated_info.assert_called_once_with("alice")

    @pytest.mark.parametrize(
        "driver_error",
        [
            FakeDriverError("duplicate key value violates unique constraint", "23505"),
            FakeDriverError("UNIQUE constraint failed: todo_tasks.code"),
        ],
    )
    async def test_unique_violation_becomes_conflict(self, uow, session, driver_error):
        session.commit.side_effect = IntegrityError("INSERT", {}, driver_error)

        async with uow:
            result = await uow.commit()

        assert is_failure(result)
        assert isinstance(result.error, ConflictError)
        assert result.error.code is ErrorCode.RESOURCE_ALREADY_EXISTS
        session.rollback.assert_awaited_once()

    async def test_other_constraint_becomes_validation_error(self, uow, session):
        session.commit.side_effect = IntegrityError(
            "INSERT", {}, FakeDriverError("NOT NULL constraint failed: todo_tasks.title")
        )

        async with uow:
            result = await uow.commit()

        assert isinstance(result.error, ValidationError)
        assert result.error.code is ErrorCode.COMMIT_CONSTRAINT_VIOLATION

    async def test_cancelled_commit_rolls_back_and_propagates(self, uow, session):
        session.commit.side_effect = asyncio.CancelledError()

        async with uow:
            with pytest.raises(asyncio.CancelledError):
                await uow.commit()

        session.rollback.assert_awaited_once()
        session.close.assert_awaited_once()
