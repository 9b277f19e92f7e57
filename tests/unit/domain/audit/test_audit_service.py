"""Tests for AuditService."""

import logging

import pytest

from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.error import AuthorizationError
from taskhub.domain.task.model.task import NewTask, TaskCategory


def _make_new_task(title: str = "Audit me") -> NewTask:
    return NewTask(title=title, category=TaskCategory.PERSONAL)


class TestRecord:
    @pytest.mark.asyncio
    async def test_record_appends_and_logs(
        self, world, services, caplog: pytest.LogCaptureFixture
    ) -> None:
        actor = world.actor("admin_s1")

        with caplog.at_level(logging.INFO, logger="taskhub.domain.audit.service.audit"):
            event = await services.audit.record(
                actor, Action.USER_UPDATE, "u-1", world.orgs["S1"].id, details="renamed"
            )

        assert world.store.audit_events == [event]
        assert event.action == "update"
        assert event.resource == "user"
        assert event.details == "renamed"
        assert any("[AUDIT]" in r.message and "u-1" in r.message for r in caplog.records)


class TestListFor:
    @pytest.mark.asyncio
    async def test_own_organization_only(self, world, services) -> None:
        own = await services.tasks.create(world.actor("admin_s1"), _make_new_task())
        await services.tasks.create(world.actor("admin_s2"), _make_new_task())

        events = await services.audit.list_for(world.actor("admin_s1"))

        assert [e.resource_id for e in events] == [own.id]

    @pytest.mark.asyncio
    async def test_root_owner_does_not_see_sub_organizations(self, world, services) -> None:
        await services.tasks.create(world.actor("admin_s1"), _make_new_task())
        own = await services.tasks.create(world.actor("owner_g1"), _make_new_task())

        events = await services.audit.list_for(world.actor("owner_g1"))

        assert [e.resource_id for e in events] == [own.id]

    @pytest.mark.asyncio
    async def test_newest_first_with_limit(self, world, services) -> None:
        services.audit.audit_log_limit = 2
        actor = world.actor("admin_s1")
        created = [
            await services.tasks.create(actor, _make_new_task(f"task {i}")) for i in range(3)
        ]

        events = await services.audit.list_for(actor)

        assert [e.resource_id for e in events] == [created[2].id, created[1].id]

    @pytest.mark.asyncio
    async def test_super_admin_sees_nothing(self, world, services) -> None:
        await services.tasks.create(world.actor("admin_s1"), _make_new_task())

        assert await services.audit.list_for(world.actor("super")) == []

    @pytest.mark.asyncio
    async def test_viewer_denied(self, world, services) -> None:
        with pytest.raises(AuthorizationError):
            await services.audit.list_for(world.actor("viewer_s1"))
