"""Integration tests running the sample Todo handlers through the dispatcher.

Tests cover:
- CreateTask returns the new id and stages a TaskCreated outbox row
- Duplicate CreateTask returns a CONFLICT result
- GetTask / CompleteTask honor tenant scoping (NOT_FOUND across tenants)
- ListTasks validates the filter and returns a mapped page
- RetitleTask persists its change even when publishing afterwards fails

Architecture:
- Integration tests with a REAL SQLite database (aiosqlite, file per test)
- Dispatcher with logging and validation behaviors (mocked logger)
"""

from unittest.mock import ANY, AsyncMock, MagicMock

import pytest
from uuid_extensions import uuid7

from src.application.cqrs import (
    Dispatcher,
    LoggingBehavior,
    RequestRegistry,
    ValidationBehavior,
)
from src.application.errors import ApplicationErrorCode
from src.application.integration_events import IntegrationEventPublisher
from src.core.result import Success, is_success
from tests.utils.todo_sample import (
    CompleteTask,
    CompleteTaskHandler,
    CreateTask,
    CreateTaskHandler,
    GetTask,
    GetTaskHandler,
    ListTasks,
    ListTasksHandler,
    RetitleTask,
    RetitleTaskHandler,
    TaskFilter,
    TaskQueryConfiguration,
    TaskSpecification,
)


@pytest.fixture
def broker() -> MagicMock:
    broker = MagicMock()
    broker.publish = AsyncMock()
    return broker


@pytest.fixture
def dispatcher(uow_factory, mock_logger, test_settings, serializer, broker) -> Dispatcher:
    registry = RequestRegistry()
    events = IntegrationEventPublisher(broker, serializer, mock_logger)
    registry.register(CreateTask, CreateTaskHandler(uow_factory))
    registry.register(CompleteTask, CompleteTaskHandler(uow_factory))
    registry.register(GetTask, GetTaskHandler(uow_factory))
    registry.register(RetitleTask, RetitleTaskHandler(uow_factory, events))
    registry.register(
        ListTasks,
        ListTasksHandler(
            uow_factory,
            query_configuration=TaskQueryConfiguration(),
            specification=TaskSpecification(),
            settings=test_settings,
        ),
    )
    registry.freeze()
    return Dispatcher(
        registry, behaviors=[LoggingBehavior(mock_logger), ValidationBehavior(registry)]
    )


@pytest.mark.integration
class TestTaskHandlers:
    """Test the sample handlers end to end."""

    async def test_create_then_get(self, dispatcher, tenant_a_ctx):
        created = await dispatcher.send(
            CreateTask(code="T-1", title="Ship", tags=("urgent",)), tenant_a_ctx
        )

        assert is_success(created)
        fetched = await dispatcher.send(GetTask(task_id=created.value.id), tenant_a_ctx)
        assert fetched.value.code == "T-1"
        assert fetched.value.tags == ("urgent",)

    async def test_duplicate_create_is_conflict(self, dispatcher, tenant_a_ctx):
        await dispatcher.send(CreateTask(code="T-1", title="Ship"), tenant_a_ctx)

        result = await dispatcher.send(CreateTask(code="T-1", title="Again"), tenant_a_ctx)

        assert result.error.code is ApplicationErrorCode.CONFLICT

    async def test_other_tenant_gets_not_found(self, dispatcher, tenant_a_ctx, tenant_b_ctx):
        created = await dispatcher.send(CreateTask(code="T-1", title="Ship"), tenant_a_ctx)

        fetched = await dispatcher.send(GetTask(task_id=created.value.id), tenant_b_ctx)
        completed = await dispatcher.send(CompleteTask(task_id=created.value.id), tenant_b_ctx)

        assert fetched.error.code is ApplicationErrorCode.NOT_FOUND
        assert completed.error.code is ApplicationErrorCode.NOT_FOUND

    async def test_complete_twice_is_conflict(self, dispatcher, tenant_a_ctx):
        created = await dispatcher.send(CreateTask(code="T-1", title="Ship"), tenant_a_ctx)

        first = await dispatcher.send(CompleteTask(task_id=created.value.id), tenant_a_ctx)
        second = await dispatcher.send(CompleteTask(task_id=created.value.id), tenant_a_ctx)

        assert first == Success(value=None)
        assert second.error.code is ApplicationErrorCode.CONFLICT

    async def test_get_unknown_task(self, dispatcher, tenant_a_ctx):
        result = await dispatcher.send(GetTask(task_id=uuid7()), tenant_a_ctx)

        assert result.error.code is ApplicationErrorCode.NOT_FOUND

    async def test_list_tasks_pages_and_maps(self, dispatcher, tenant_a_ctx):
        for n in range(1, 13):
            await dispatcher.send(CreateTask(code=f"T-{n:02d}", title=f"Task {n}"), tenant_a_ctx)

        result = await dispatcher.send(
            ListTasks(filter=TaskFilter(page_number=2, page_size=5, sort_field="code")),
            tenant_a_ctx,
        )

        page = result.value
        assert [dto.code for dto in page] == ["T-06", "T-07", "T-08", "T-09", "T-10"]
        assert page.total_count == 12
        assert page.has_previous_page and page.has_next_page

    async def test_list_tasks_invalid_filter(self, dispatcher, tenant_a_ctx):
        result = await dispatcher.send(
            ListTasks(filter=TaskFilter(sort_field="owner")), tenant_a_ctx
        )

        assert result.error.code is ApplicationErrorCode.VALIDATION_FAILED
        assert "sort_field" in result.error.details


@pytest.mark.integration
class TestPublishAfterCommit:
    """Test handlers that publish directly once their unit of work commits."""

    async def test_retitle_publishes_event(self, dispatcher, broker, serializer, tenant_a_ctx):
        created = await dispatcher.send(CreateTask(code="T-1", title="Ship"), tenant_a_ctx)

        result = await dispatcher.send(
            RetitleTask(task_id=created.value.id, title="Ship it"), tenant_a_ctx
        )

        assert result == Success(value=None)
        event_type, message = broker.publish.await_args.args
        assert event_type == "todo.task_retitled"
        assert '"Ship it"' in message

    async def test_broker_failure_keeps_committed_change(
        self, dispatcher, broker, mock_logger, tenant_a_ctx
    ):
        created = await dispatcher.send(CreateTask(code="T-1", title="Ship"), tenant_a_ctx)
        broker.publish.side_effect = ConnectionError("broker down")

        result = await dispatcher.send(
            RetitleTask(task_id=created.value.id, title="Ship it"), tenant_a_ctx
        )

        assert result == Success(value=None)
        fetched = await dispatcher.send(GetTask(task_id=created.value.id), tenant_a_ctx)
        assert fetched.value.title == "Ship it"
        mock_logger.error.assert_any_call(
            "integration_event_publish_failed",
            error=ANY,
            event_type="todo.task_retitled",
            event_id=ANY,
        )

    async def test_retitle_unknown_task_publishes_nothing(
        self, dispatcher, broker, tenant_a_ctx
    ):
        result = await dispatcher.send(
            RetitleTask(task_id=uuid7(), title="Ship it"), tenant_a_ctx
        )

        assert result.error.code is ApplicationErrorCode.NOT_FOUND
        broker.publish.assert_not_awaited()
