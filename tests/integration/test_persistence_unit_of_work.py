"""Integration tests for the write repository and unit of work.

Tests cover:
- Staged writes persist only on commit (close discards)
- Atomic commit of several aggregates and the affected record count
- Unique violations become ConflictError; the first row is kept
- Other constraint violations become ValidationError
- Audit stamping on create and update
- Tenant stamping and cross-tenant write rejection
- Tracked loads through the write repository, update and delete

Architecture:
- Integration tests with a REAL SQLite database (aiosqlite, file per test)
"""

import pytest
from uuid_extensions import uuid7

from src.core.errors import ConflictError, ValidationError
from src.core.result import is_failure, is_success
from src.domain.errors import TenantAccessError
from src.domain.value_objects import RequestContext
from tests.utils.todo_sample import TaskQueryConfiguration, TodoTag, TodoTask


async def count_tasks(uow_factory, ctx) -> int:
    async with uow_factory(ctx) as uow:
        return len(await uow.read_repository(TodoTask).get_all(ctx))


@pytest.mark.integration
class TestCommitBoundary:
    """Test atomicity and the affected record count."""

    async def test_close_without_commit_discards(self, uow_factory, tenant_a_ctx):
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(
                tenant_a_ctx, TodoTask(code="T-1", title="Draft")
            )

        assert await count_tasks(uow_factory, tenant_a_ctx) == 0

    async def test_commit_persists_all_and_counts(self, uow_factory, tenant_a_ctx):
        tasks = [TodoTask(code=f"T-{n}", title="Ship") for n in range(3)]

        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add_range(tenant_a_ctx, tasks)
            result = await uow.commit()

        assert result.value == 3
        assert await count_tasks(uow_factory, tenant_a_ctx) == 3

    async def test_ids_known_before_commit(self, uow_factory, tenant_a_ctx):
        task = TodoTask(code="T-1", title="Ship")
        assigned = task.id

        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(tenant_a_ctx, task)
            await uow.commit()

        assert assigned is not None
        async with uow_factory(tenant_a_ctx) as uow:
            assert await uow.read_repository(TodoTask).get_by_id(tenant_a_ctx, assigned)

    async def test_duplicate_code_is_conflict_and_first_row_kept(
        self, uow_factory, tenant_a_ctx
    ):
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(
                tenant_a_ctx, TodoTask(code="T-1", title="First")
            )
            assert is_success(await uow.commit())

        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add_range(
                tenant_a_ctx,
                [TodoTask(code="T-2", title="Sibling"), TodoTask(code="T-1", title="Second")],
            )
            result = await uow.commit()

        assert is_failure(result)
        assert isinstance(result.error, ConflictError)
        async with uow_factory(tenant_a_ctx) as uow:
            rows = await uow.read_repository(TodoTask).get_all(tenant_a_ctx)
        assert [(row.code, row.title) for row in rows] == [("T-1", "First")]

    async def test_same_code_in_other_tenant_allowed(
        self, uow_factory, tenant_a_ctx, tenant_b_ctx
    ):
        for ctx in (tenant_a_ctx, tenant_b_ctx):
            async with uow_factory(ctx) as uow:
                await uow.write_repository(TodoTask).add(ctx, TodoTask(code="T-1", title="x"))
                assert is_success(await uow.commit())

    async def test_not_null_violation_is_validation_error(self, uow_factory, tenant_a_ctx):
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(
                tenant_a_ctx, TodoTask(code="T-1", title=None)
            )
            result = await uow.commit()

        assert isinstance(result.error, ValidationError)

    async def test_unit_of_work_usable_after_rejected_commit(self, uow_factory, tenant_a_ctx):
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(
                tenant_a_ctx, TodoTask(code="T-1", title=None)
            )
            assert is_failure(await uow.commit())

            await uow.write_repository(TodoTask).add(
                tenant_a_ctx, TodoTask(code="T-2", title="Valid")
            )
            assert is_success(await uow.commit())

        assert await count_tasks(uow_factory, tenant_a_ctx) == 1


@pytest.mark.integration
class TestAuditStamping:
    """Test created_by / updated_by stamping at commit."""

    async def test_create_and_update_stamped(self, uow_factory, tenant_a_ctx):
        task = TodoTask(code="T-1", title="Ship")
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(tenant_a_ctx, task)
            await uow.commit()

        editor = RequestContext(
            user_id=uuid7(), username="carol", tenant_id=tenant_a_ctx.tenant_id
        )
        async with uow_factory(editor) as uow:
            tasks = uow.write_repository(TodoTask)
            tracked = await tasks.get_by_id(editor, task.id)
            tracked.title = "Ship it"
            await tasks.update(editor, tracked)
            result = await uow.commit()

        assert result.value == 1
        async with uow_factory(tenant_a_ctx) as uow:
            stored = await uow.read_repository(TodoTask).get_by_id(tenant_a_ctx, task.id)
        assert stored.created_by == "alice"
        assert stored.updated_by == "carol"
        assert stored.title == "Ship it"

    async def test_system_caller_stamped_as_system(self, uow_factory, tenant_a_ctx):
        ctx = RequestContext.system()
        task = TodoTask(code="T-1", title="Seeded", tenant_id=tenant_a_ctx.tenant_id)

        async with uow_factory(ctx) as uow:
            await uow.write_repository(TodoTask).add(ctx, task)
            await uow.commit()

        assert task.created_by == "system"


@pytest.mark.integration
class TestWriteTenancy:
    """Test tenant rules on writes."""

    async def test_add_stamps_caller_tenant(self, uow_factory, tenant_a_ctx):
        task = TodoTask(code="T-1", title="Ship")

        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(tenant_a_ctx, task)
            await uow.commit()

        assert task.tenant_id == tenant_a_ctx.tenant_id

    async def test_add_for_other_tenant_rejected(self, uow_factory, tenant_a_ctx, tenant_b_ctx):
        async with uow_factory(tenant_a_ctx) as uow:
            with pytest.raises(TenantAccessError):
                await uow.write_repository(TodoTask).add(
                    tenant_a_ctx,
                    TodoTask(code="T-1", title="x", tenant_id=tenant_b_ctx.tenant_id),
                )

    async def test_add_range_rejects_all_when_one_foreign(
        self, uow_factory, tenant_a_ctx, tenant_b_ctx
    ):
        async with uow_factory(tenant_a_ctx) as uow:
            with pytest.raises(TenantAccessError):
                await uow.write_repository(TodoTask).add_range(
                    tenant_a_ctx,
                    [
                        TodoTask(code="T-1", title="mine"),
                        TodoTask(code="T-2", title="theirs", tenant_id=tenant_b_ctx.tenant_id),
                    ],
                )
            result = await uow.commit()

        assert result.value == 0

    async def test_untenanted_caller_cannot_add(self, uow_factory):
        ctx = RequestContext(user_id=uuid7(), username="drifter")

        async with uow_factory(ctx) as uow:
            with pytest.raises(TenantAccessError):
                await uow.write_repository(TodoTask).add(ctx, TodoTask(code="T-1", title="x"))

    async def test_cross_tenant_tracked_load_returns_none(
        self, uow_factory, tenant_a_ctx, tenant_b_ctx
    ):
        task = TodoTask(code="T-1", title="Ship")
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(tenant_a_ctx, task)
            await uow.commit()

        async with uow_factory(tenant_b_ctx) as uow:
            assert await uow.write_repository(TodoTask).get_by_id(tenant_b_ctx, task.id) is None

    async def test_cross_tenant_update_rejected(
        self, uow_factory, tenant_a_ctx, tenant_b_ctx, admin_ctx
    ):
        task = TodoTask(code="T-1", title="Ship")
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(tenant_a_ctx, task)
            await uow.commit()

        async with uow_factory(admin_ctx) as uow:
            loaded = await uow.write_repository(TodoTask).get_by_id(admin_ctx, task.id)

        async with uow_factory(tenant_b_ctx) as uow:
            with pytest.raises(TenantAccessError):
                await uow.write_repository(TodoTask).update(tenant_b_ctx, loaded)


@pytest.mark.integration
class TestTrackedChanges:
    """Test update and delete through tracked loads."""

    async def test_delete_removes_aggregate_and_related_rows(self, uow_factory, tenant_a_ctx):
        task = TodoTask(code="T-1", title="Ship", tags=[TodoTag(name="a"), TodoTag(name="b")])
        async with uow_factory(tenant_a_ctx) as uow:
            await uow.write_repository(TodoTask).add(tenant_a_ctx, task)
            await uow.commit()

        async with uow_factory(tenant_a_ctx) as uow:
            tasks = uow.write_repository(TodoTask, query_configuration=TaskQueryConfiguration())
            tracked = await tasks.get_by_id(tenant_a_ctx, task.id)
            assert [tag.name for tag in tracked.tags] == ["a", "b"]
            await tasks.delete(tenant_a_ctx, tracked)
            result = await uow.commit()

        assert result.value == 3
        assert await count_tasks(uow_factory, tenant_a_ctx) == 0
        async with uow_factory(tenant_a_ctx) as uow:
            assert await uow.read_repository(TodoTag).get_all(tenant_a_ctx) == []
