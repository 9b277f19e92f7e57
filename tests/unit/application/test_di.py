"""Tests for the application container."""

import pytest

from taskhub.application.di import create_container
from taskhub.config import AuthzConfig, Config
from taskhub.domain.audit.service.audit import AuditService
from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.model.catalog import default_permissions
from taskhub.domain.auth.model.role import RoleType
from taskhub.domain.auth.service.access import AccessDecisionEngine
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.organization.model.organization import NewOrganization
from taskhub.domain.organization.service.organization import OrganizationService
from taskhub.domain.shared.model.value import UserId
from taskhub.domain.task.service.task import TaskService
from taskhub.domain.user.service.user import UserService
from taskhub.infrastructure.memory.store import MemoryStore
from taskhub.util.di.scope import Scope


def _make_config(**authz) -> Config:
    return Config(authz=AuthzConfig(password_rounds=4, **authz))


class TestContainer:
    @pytest.mark.asyncio
    async def test_resolves_services(self) -> None:
        container = create_container(_make_config())
        try:
            async with container(scope=Scope.UOW) as uow:
                assert isinstance(await uow.get(TaskService), TaskService)
                assert isinstance(await uow.get(UserService), UserService)
                assert isinstance(await uow.get(OrganizationService), OrganizationService)
                assert isinstance(await uow.get(AuthorizationGateway), AuthorizationGateway)
        finally:
            await container.close()

    @pytest.mark.asyncio
    async def test_config_reaches_services(self) -> None:
        container = create_container(
            _make_config(
                audit_log_limit=7, default_password="changeme", harden_user_mutations=True
            )
        )
        try:
            engine = await container.get(AccessDecisionEngine)
            async with container(scope=Scope.UOW) as uow:
                audit = await uow.get(AuditService)
                users = await uow.get(UserService)
        finally:
            await container.close()

        assert engine.harden_user_mutations is True
        assert audit.audit_log_limit == 7
        assert users.default_password == "changeme"

    @pytest.mark.asyncio
    async def test_store_outlives_unit_of_work(self) -> None:
        super_admin = Actor(
            user_id=UserId("root"),
            role_type=RoleType.OWNER,
            permissions=default_permissions(RoleType.OWNER),
        )
        container = create_container(_make_config())
        try:
            async with container(scope=Scope.UOW) as uow:
                organizations = await uow.get(OrganizationService)
                created = await organizations.create(super_admin, NewOrganization(name="G1"))

            async with container(scope=Scope.UOW) as uow:
                organizations = await uow.get(OrganizationService)
                listed = await organizations.list_organizations(super_admin)

            store = await container.get(MemoryStore)
        finally:
            await container.close()

        assert [o.id for o in listed] == [created.id]
        assert created.id in store.organizations
