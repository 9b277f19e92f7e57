"""Tests for TaskService."""

import pytest

from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.shared.error import (
    AuthorizationError,
    InvariantViolationError,
    NotFoundError,
    ScopeViolationError,
)
from taskhub.domain.shared.model.value import TaskId
from taskhub.domain.task.model.task import NewTask, TaskCategory, TaskChanges, TaskStatus


def _make_new_task(**overrides) -> NewTask:
    defaults = dict(title="Prepare budget", category=TaskCategory.WORK)
    defaults.update(overrides)
    return NewTask(**defaults)


class TestCreateTask:
    @pytest.mark.asyncio
    async def test_defaults(self, world, services) -> None:
        actor = world.actor("admin_s1")

        task = await services.tasks.create(actor, _make_new_task())

        assert task.status == TaskStatus.TODO
        assert task.priority == 1
        assert task.assigned_user_id == actor.user_id
        assert task.created_by_id == actor.user_id
        assert task.is_active
        assert task.id in world.store.tasks

    @pytest.mark.asyncio
    async def test_admin_is_placed_in_own_organization(self, world, services) -> None:
        task = await services.tasks.create(
            world.actor("admin_s1"), _make_new_task(organization_id=world.orgs["G2"].id)
        )

        assert task.organization_id == world.orgs["S1"].id

    @pytest.mark.asyncio
    async def test_root_owner_without_target_uses_own_organization(self, world, services) -> None:
        task = await services.tasks.create(world.actor("owner_g1"), _make_new_task())

        assert task.organization_id == world.orgs["G1"].id

    @pytest.mark.asyncio
    async def test_root_owner_cannot_target_foreign_tree(self, world, services) -> None:
        with pytest.raises(ScopeViolationError):
            await services.tasks.create(
                world.actor("owner_g1"), _make_new_task(organization_id=world.orgs["T1"].id)
            )

    @pytest.mark.asyncio
    async def test_super_admin_must_name_organization(self, world, services) -> None:
        with pytest.raises(InvariantViolationError):
            await services.tasks.create(world.actor("super"), _make_new_task())

    @pytest.mark.asyncio
    async def test_super_admin_unknown_organization(self, world, services) -> None:
        with pytest.raises(NotFoundError):
            await services.tasks.create(
                world.actor("super"), _make_new_task(organization_id="missing")
            )

    @pytest.mark.asyncio
    async def test_records_one_audit_event(self, world, services) -> None:
        task = await services.tasks.create(world.actor("admin_s1"), _make_new_task())

        assert len(world.store.audit_events) == 1
        event = world.store.audit_events[0]
        assert event.action == "create"
        assert event.resource == "task"
        assert event.resource_id == task.id
        assert event.organization_id == task.organization_id


class TestListTasks:
    @pytest.mark.asyncio
    async def test_newest_first_and_active_only(self, world, services) -> None:
        actor = world.actor("admin_s1")
        first = await services.tasks.create(actor, _make_new_task(title="first"))
        second = await services.tasks.create(actor, _make_new_task(title="second"))
        gone = await services.tasks.create(actor, _make_new_task(title="gone"))
        await services.tasks.delete(actor, gone.id)

        listed = await services.tasks.list_tasks(actor)

        assert [t.id for t in listed] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_viewer_sees_own_organization(self, world, services) -> None:
        own = await services.tasks.create(world.actor("admin_s1"), _make_new_task())
        await services.tasks.create(world.actor("admin_s2"), _make_new_task())

        listed = await services.tasks.list_tasks(world.actor("viewer_s1"))

        assert [t.id for t in listed] == [own.id]

    @pytest.mark.asyncio
    async def test_root_owner_sees_whole_subtree(self, world, services) -> None:
        await services.tasks.create(world.actor("admin_s1"), _make_new_task())
        await services.tasks.create(world.actor("admin_s2"), _make_new_task())
        await services.tasks.create(world.actor("owner_g2"), _make_new_task())

        listed = await services.tasks.list_tasks(world.actor("owner_g1"))

        assert {t.organization_id for t in listed} == {world.orgs["S1"].id, world.orgs["S2"].id}

    @pytest.mark.asyncio
    async def test_admin_cannot_filter(self, world, services) -> None:
        with pytest.raises(AuthorizationError):
            await services.tasks.list_tasks(
                world.actor("admin_s1"), organization_id=world.orgs["S1"].id
            )


class TestSingleTask:
    @pytest.mark.asyncio
    async def test_get_in_scope(self, world, services) -> None:
        task = await services.tasks.create(world.actor("admin_s1"), _make_new_task())

        fetched = await services.tasks.get(world.actor("viewer_s1"), task.id)

        assert fetched.id == task.id

    @pytest.mark.asyncio
    async def test_get_missing(self, world, services) -> None:
        with pytest.raises(NotFoundError):
            await services.tasks.get(world.actor("admin_s1"), TaskId("missing"))

    @pytest.mark.asyncio
    async def test_deleted_task_is_not_found(self, world, services) -> None:
        actor = world.actor("admin_s1")
        task = await services.tasks.create(actor, _make_new_task())
        await services.tasks.delete(actor, task.id)

        with pytest.raises(NotFoundError):
            await services.tasks.get(actor, task.id)
        assert world.store.tasks[task.id].is_active is False

    @pytest.mark.asyncio
    async def test_update(self, world, services) -> None:
        actor = world.actor("admin_s1")
        task = await services.tasks.create(actor, _make_new_task())

        updated = await services.tasks.update(
            actor, task.id, TaskChanges(status=TaskStatus.DONE, priority=3)
        )

        assert updated.status == TaskStatus.DONE
        assert updated.priority == 3
        assert updated.updated_at is not None
        assert world.store.tasks[task.id].status == TaskStatus.DONE

    @pytest.mark.asyncio
    async def test_viewer_cannot_update_even_missing_task(self, world, services) -> None:
        with pytest.raises(AuthorizationError) as exc_info:
            await services.tasks.update(
                world.actor("viewer_s1"), TaskId("missing"), TaskChanges(title="x")
            )
        assert type(exc_info.value) is AuthorizationError

    @pytest.mark.asyncio
    async def test_each_mutation_is_audited(self, world, services) -> None:
        actor = world.actor("admin_s1")
        task = await services.tasks.create(actor, _make_new_task())
        await services.tasks.update(actor, task.id, TaskChanges(title="renamed"))
        await services.tasks.delete(actor, task.id)

        assert [e.action for e in world.store.audit_events] == ["create", "update", "delete"]

    @pytest.mark.asyncio
    async def test_update_cannot_deactivate(self, world, services) -> None:
        actor = world.actor("admin_s1")
        task = await services.tasks.create(actor, _make_new_task())

        await services.tasks.update(
            actor, task.id, TaskChanges.model_validate({"title": "renamed", "is_active": False})
        )

        assert "is_active" not in TaskChanges.model_fields
        assert world.store.tasks[task.id].is_active is True
        assert [t.id for t in await services.tasks.list_tasks(actor)] == [task.id]

    @pytest.mark.asyncio
    async def test_delete_needs_delete_permission(self, world, services) -> None:
        owner = world.actor("admin_s1")
        task = await services.tasks.create(owner, _make_new_task())
        role = world.store.roles[world.roles["admin_s1"].id]
        role.permissions = role.permissions - {PermissionType.DELETE_TASK}
        actor = world.actor("admin_s1")

        with pytest.raises(AuthorizationError):
            await services.tasks.delete(actor, task.id)
        await services.tasks.update(actor, task.id, TaskChanges(title="still here"))

        assert world.store.tasks[task.id].is_active is True
        assert world.store.tasks[task.id].title == "still here"
