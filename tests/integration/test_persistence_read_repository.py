"""Integration tests for the generic read repository.

Tests cover:
- Paging over 25 rows with page size 10 yields pages of 10, 10 and 5
- Deterministic ordering (repeated reads, identity tie-breaker)
- Search, criteria, sort and page size clamping
- Identical aggregate shape from get_by_id and get_paged
- Query configuration applied twice yields the same aggregate shape
- Tenant scoping (cross-tenant reads, elevated and untenanted callers)
- get_all / get_first / exists / export

Architecture:
- Integration tests with a REAL SQLite database (aiosqlite, file per test)
- Rows are created through units of work, read through fresh ones
"""

import pytest
from sqlalchemy import inspect as sa_inspect
from uuid_extensions import uuid7

from src.core.config import Settings
from src.domain.errors import InvalidSortFieldError
from src.domain.value_objects import Filter, RequestContext
from src.infrastructure.persistence import SqlAlchemyUnitOfWorkFactory
from tests.utils.todo_sample import (
    TaskFilter,
    TaskQueryConfiguration,
    TaskSpecification,
    TodoTag,
    TodoTask,
)


# =============================================================================
# Test Helpers
# =============================================================================


async def seed_tasks(uow_factory, ctx, count, *, project_id=None, prefix="T"):
    """Create count tasks with codes T-01.. and one tag each."""
    async with uow_factory(ctx) as uow:
        tasks = [
            TodoTask(
                code=f"{prefix}-{n:02d}",
                title=f"Task {n}",
                project_id=project_id,
                priority=n % 3,
                tags=[TodoTag(name=f"tag-{n}")],
            )
            for n in range(1, count + 1)
        ]
        await uow.write_repository(TodoTask).add_range(ctx, tasks)
        result = await uow.commit()
    assert result.value >= count
    return tasks


class ConfiguredTwice:
    def configure_aggregate(self, query):
        configuration = TaskQueryConfiguration()
        return configuration.configure_aggregate(configuration.configure_aggregate(query))


def read_repo(uow):
    return uow.read_repository(
        TodoTask,
        query_configuration=TaskQueryConfiguration(),
        specification=TaskSpecification(),
    )


# =============================================================================
# Paging
# =============================================================================


@pytest.mark.integration
class TestPaging:
    """Test page sizes and determinism."""

    async def test_pages_of_ten_ten_five(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 25)

        sizes = []
        seen = []
        async with uow_factory(tenant_a_ctx) as uow:
            for page_number in (1, 2, 3):
                page = await read_repo(uow).get_paged(
                    tenant_a_ctx, Filter(page_number=page_number, page_size=10)
                )
                sizes.append(len(page))
                seen.extend(task.code for task in page)
                assert page.total_count == 25
                assert page.total_pages == 3

        assert sizes == [10, 10, 5]
        assert seen == [f"T-{n:02d}" for n in range(1, 26)]

    async def test_page_beyond_end_is_empty(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 5)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(
                tenant_a_ctx, Filter(page_number=4, page_size=2)
            )

        assert len(page) == 0
        assert page.total_count == 5
        assert not page.has_next_page

    async def test_repeated_reads_return_identical_pages(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 12)
        page_filter = Filter(sort_field="priority", page_number=2, page_size=5)

        async with uow_factory(tenant_a_ctx) as uow:
            first = [t.id for t in await read_repo(uow).get_paged(tenant_a_ctx, page_filter)]
        async with uow_factory(tenant_a_ctx) as uow:
            second = [t.id for t in await read_repo(uow).get_paged(tenant_a_ctx, page_filter)]

        assert first == second

    async def test_ties_broken_by_identity(self, uow_factory, tenant_a_ctx):
        """Without a specification, ordering falls back to the primary key."""
        tasks = await seed_tasks(uow_factory, tenant_a_ctx, 6)

        async with uow_factory(tenant_a_ctx) as uow:
            repo = uow.read_repository(TodoTask)
            page = await repo.get_paged(tenant_a_ctx, Filter(page_size=6))

        assert [t.id for t in page] == sorted(task.id for task in tasks)

    async def test_page_size_clamped_to_max(self, database, serializer, mock_logger, tenant_a_ctx):
        uow_factory = SqlAlchemyUnitOfWorkFactory(
            database, serializer, mock_logger, Settings(_env_file=None, default_page_size=5, max_page_size=5)
        )
        await seed_tasks(uow_factory, tenant_a_ctx, 8)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(tenant_a_ctx, Filter(page_size=20))

        assert page.page_size == 5
        assert len(page) == 5
        assert page.total_pages == 2


# =============================================================================
# Search, criteria, sort
# =============================================================================


@pytest.mark.integration
class TestSearchAndSort:
    """Test specification-driven filtering and ordering."""

    async def test_search_is_case_insensitive_substring(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 12)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(tenant_a_ctx, Filter(search_by="TASK 1"))

        assert sorted(t.code for t in page) == ["T-01", "T-10", "T-11", "T-12"]
        assert page.total_count == 4

    async def test_search_treats_wildcards_literally(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 3)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(tenant_a_ctx, Filter(search_by="%"))

        assert page.total_count == 0

    async def test_blank_search_matches_everything(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 3)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(tenant_a_ctx, Filter(search_by="  "))

        assert page.total_count == 3

    async def test_project_criteria(self, uow_factory, tenant_a_ctx):
        project_id = uuid7()
        await seed_tasks(uow_factory, tenant_a_ctx, 3, project_id=project_id, prefix="P")
        await seed_tasks(uow_factory, tenant_a_ctx, 4)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(
                tenant_a_ctx, TaskFilter(project_id=project_id)
            )

        assert [t.code for t in page] == ["P-01", "P-02", "P-03"]

    async def test_sort_descending_by_public_name(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 4)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(
                tenant_a_ctx, Filter(sort_field="CODE", sort_direction="desc")
            )

        assert [t.code for t in page] == ["T-04", "T-03", "T-02", "T-01"]
        assert page.sort_field == "CODE"
        assert page.sort_direction == "desc"

    async def test_unknown_direction_sorts_ascending(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 3)

        async with uow_factory(tenant_a_ctx) as uow:
            page = await read_repo(uow).get_paged(
                tenant_a_ctx, Filter(sort_field="code", sort_direction="sideways")
            )

        assert [t.code for t in page] == ["T-01", "T-02", "T-03"]
        assert page.sort_direction == "asc"

    async def test_unknown_sort_field_raises(self, uow_factory, tenant_a_ctx):
        async with uow_factory(tenant_a_ctx) as uow:
            with pytest.raises(InvalidSortFieldError):
                await read_repo(uow).get_paged(tenant_a_ctx, Filter(sort_field="owner"))


# =============================================================================
# Aggregate shape
# =============================================================================


@pytest.mark.integration
class TestAggregateShape:
    """Test that both read paths load the same related data."""

    async def test_get_by_id_and_get_paged_load_tags(self, uow_factory, tenant_a_ctx):
        [task] = await seed_tasks(uow_factory, tenant_a_ctx, 1)

        async with uow_factory(tenant_a_ctx) as uow:
            by_id = await read_repo(uow).get_by_id(tenant_a_ctx, task.id)
        async with uow_factory(tenant_a_ctx) as uow:
            [from_page] = await read_repo(uow).get_paged(tenant_a_ctx, Filter())

        assert "tags" not in sa_inspect(by_id).unloaded
        assert "tags" not in sa_inspect(from_page).unloaded
        assert [tag.name for tag in by_id.tags] == [tag.name for tag in from_page.tags]

    async def test_without_configuration_tags_not_loaded(self, uow_factory, tenant_a_ctx):
        [task] = await seed_tasks(uow_factory, tenant_a_ctx, 1)

        async with uow_factory(tenant_a_ctx) as uow:
            loaded = await uow.read_repository(TodoTask).get_by_id(tenant_a_ctx, task.id)

        assert "tags" in sa_inspect(loaded).unloaded

    async def test_configuration_applied_twice_gives_same_shape(
        self, uow_factory, tenant_a_ctx
    ):
        async with uow_factory(tenant_a_ctx) as uow:
            tasks = [
                TodoTask(
                    code=f"T-{n}",
                    title=f"Task {n}",
                    tags=[TodoTag(name=f"b-{n}"), TodoTag(name=f"a-{n}")],
                )
                for n in range(1, 4)
            ]
            await uow.write_repository(TodoTask).add_range(tenant_a_ctx, tasks)
            await uow.commit()

        def shape(page, single):
            return (
                [(task.code, [tag.name for tag in task.tags]) for task in page],
                page.total_count,
                [tag.name for tag in single.tags],
            )

        shapes = []
        for configuration in (TaskQueryConfiguration(), ConfiguredTwice()):
            async with uow_factory(tenant_a_ctx) as uow:
                repo = uow.read_repository(
                    TodoTask,
                    query_configuration=configuration,
                    specification=TaskSpecification(),
                )
                page = await repo.get_paged(tenant_a_ctx, Filter(page_size=10))
                single = await repo.get_by_id(tenant_a_ctx, tasks[0].id)
            shapes.append(shape(page, single))

        assert shapes[0] == shapes[1]
        assert shapes[1][1] == 3
        assert shapes[1][2] == ["a-1", "b-1"]


# =============================================================================
# Tenant scoping
# =============================================================================


@pytest.mark.integration
class TestTenantScoping:
    """Test tenant isolation on reads."""

    async def test_cross_tenant_get_by_id_returns_none(
        self, uow_factory, tenant_a_ctx, tenant_b_ctx
    ):
        [task] = await seed_tasks(uow_factory, tenant_a_ctx, 1)

        async with uow_factory(tenant_b_ctx) as uow:
            assert await read_repo(uow).get_by_id(tenant_b_ctx, task.id) is None

    async def test_tenants_page_only_their_rows(self, uow_factory, tenant_a_ctx, tenant_b_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 4)
        await seed_tasks(uow_factory, tenant_b_ctx, 2)

        async with uow_factory(tenant_b_ctx) as uow:
            page = await read_repo(uow).get_paged(tenant_b_ctx, Filter(search_by="task"))

        assert page.total_count == 2
        assert all(task.tenant_id == tenant_b_ctx.tenant_id for task in page)

    async def test_elevated_caller_sees_every_tenant(
        self, uow_factory, tenant_a_ctx, tenant_b_ctx, admin_ctx
    ):
        await seed_tasks(uow_factory, tenant_a_ctx, 4)
        await seed_tasks(uow_factory, tenant_b_ctx, 2)

        async with uow_factory(admin_ctx) as uow:
            page = await read_repo(uow).get_paged(admin_ctx, Filter())

        assert page.total_count == 6

    async def test_untenanted_caller_sees_nothing(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 3)
        ctx = RequestContext(user_id=uuid7(), username="drifter")

        async with uow_factory(ctx) as uow:
            page = await read_repo(uow).get_paged(ctx, Filter())
            exists = await read_repo(uow).exists(ctx)

        assert page.total_count == 0
        assert not exists


# =============================================================================
# Additional reads
# =============================================================================


@pytest.mark.integration
class TestAdditionalReads:
    """Test get_all, get_first, exists and export."""

    async def test_get_all_and_get_first_by_criteria(self, uow_factory, tenant_a_ctx):
        tasks = await seed_tasks(uow_factory, tenant_a_ctx, 6)
        expected = sorted(task.id for task in tasks if task.priority == 0)

        async with uow_factory(tenant_a_ctx) as uow:
            repo = read_repo(uow)
            matching = await repo.get_all(tenant_a_ctx, priority=0)
            first = await repo.get_first(tenant_a_ctx, priority=0)
            missing = await repo.get_first(tenant_a_ctx, code="nope")

        assert [task.id for task in matching] == expected
        assert first.id == expected[0]
        assert missing is None

    async def test_exists(self, uow_factory, tenant_a_ctx, tenant_b_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 1)

        async with uow_factory(tenant_a_ctx) as uow:
            assert await read_repo(uow).exists(tenant_a_ctx, code="T-01")
        async with uow_factory(tenant_b_ctx) as uow:
            assert not await read_repo(uow).exists(tenant_b_ctx, code="T-01")

    async def test_export_ignores_paging_in_requested_order(self, uow_factory, tenant_a_ctx):
        await seed_tasks(uow_factory, tenant_a_ctx, 15)

        async with uow_factory(tenant_a_ctx) as uow:
            rows = await read_repo(uow).export(
                tenant_a_ctx,
                Filter(sort_field="code", sort_direction="desc", page_size=2, page_number=3),
            )

        assert len(rows) == 15
        assert rows[0].code == "T-15"

    async def test_export_capped(self, database, serializer, mock_logger, tenant_a_ctx):
        uow_factory = SqlAlchemyUnitOfWorkFactory(
            database, serializer, mock_logger, Settings(_env_file=None, max_export_size=4)
        )
        await seed_tasks(uow_factory, tenant_a_ctx, 7)

        async with uow_factory(tenant_a_ctx) as uow:
            rows = await read_repo(uow).export(tenant_a_ctx, Filter())

        assert [row.code for row in rows] == ["T-01", "T-02", "T-03", "T-04"]
