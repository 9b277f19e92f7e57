"""Shared organization tree for unit tests.

Two main organizations:

    G1 (level 0)            G2 (level 0)
    ├── S1 (level 1)        └── T1 (level 1)
    └── S2 (level 1)

with one user per interesting placement and the Super Admin.
"""

from dataclasses import dataclass

import pytest

from taskhub.domain.audit.service.audit import AuditService
from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.model.role import Role, RoleType
from taskhub.domain.auth.service.access import AccessDecisionEngine
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.organization.model.organization import Organization
from taskhub.domain.organization.service.organization import OrganizationService
from taskhub.domain.organization.service.scope import ScopeResolver
from taskhub.domain.task.service.task import TaskService
from taskhub.domain.user.model.user import User
from taskhub.domain.user.port.password import PasswordHasher
from taskhub.domain.user.service.user import UserService
from taskhub.infrastructure.memory.repository import (
    MemoryAuditLogRepository,
    MemoryOrganizationRepository,
    MemoryRoleRepository,
    MemoryTaskRepository,
    MemoryUserRepository,
)
from taskhub.infrastructure.memory.store import MemoryStore


class PlainHasher(PasswordHasher):
    """Reversible stand-in for bcrypt so tests stay fast."""

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed:{password}"


@dataclass
class World:
    store: MemoryStore
    orgs: dict[str, Organization]
    roles: dict[str, Role]
    users: dict[str, User]

    def actor(self, name: str) -> Actor:
        user = self.users[name]
        role = self.store.roles[user.role_id]
        organization = (
            self.store.organizations.get(user.organization_id) if user.organization_id else None
        )
        return Actor.from_state(user.id, role, organization)


@dataclass
class Services:
    gateway: AuthorizationGateway
    scope_resolver: ScopeResolver
    tasks: TaskService
    users: UserService
    organizations: OrganizationService
    audit: AuditService


def _seed() -> World:
    store = MemoryStore()

    g1 = Organization.create("G1")
    s1 = Organization.create("S1", parent=g1)
    s2 = Organization.create("S2", parent=g1)
    g2 = Organization.create("G2")
    t1 = Organization.create("T1", parent=g2)
    orgs = {"G1": g1, "S1": s1, "S2": s2, "G2": g2, "T1": t1}

    roles = {
        "super": Role.create("Super Admin", RoleType.OWNER),
        "owner_g1": Role.create("G1 Owner", RoleType.OWNER, g1.id),
        "admin_g1": Role.create("G1 Admin", RoleType.ADMIN, g1.id),
        "admin_s1": Role.create("S1 Admin", RoleType.ADMIN, s1.id),
        "viewer_s1": Role.create("S1 Viewer", RoleType.VIEWER, s1.id),
        "admin_s2": Role.create("S2 Admin", RoleType.ADMIN, s2.id),
        "owner_g2": Role.create("G2 Owner", RoleType.OWNER, g2.id),
    }

    def user(first: str, role: str, org: Organization | None) -> User:
        return User.create(
            email=f"{first.lower()}@example.com",
            password_hash="hashed:password123",
            first_name=first,
            last_name="Test",
            role_id=roles[role].id,
            organization_id=org.id if org else None,
        )

    users = {
        "super": user("Sam", "super", None),
        "owner_g1": user("Olivia", "owner_g1", g1),
        "admin_s1": user("Adam", "admin_s1", s1),
        "viewer_s1": user("Vera", "viewer_s1", s1),
        "admin_s2": user("Anna", "admin_s2", s2),
        "owner_g2": user("Oscar", "owner_g2", g2),
    }

    for org in orgs.values():
        store.organizations[org.id] = org
    for role in roles.values():
        store.roles[role.id] = role
    for u in users.values():
        store.users[u.id] = u
    return World(store=store, orgs=orgs, roles=roles, users=users)


def make_services(store: MemoryStore, *, harden_user_mutations: bool = False) -> Services:
    organization_repo = MemoryOrganizationRepository(store)
    role_repo = MemoryRoleRepository(store)
    user_repo = MemoryUserRepository(store)
    task_repo = MemoryTaskRepository(store)

    scope_resolver = ScopeResolver(organization_repo=organization_repo, user_repo=user_repo)
    gateway = AuthorizationGateway(
        scope_resolver=scope_resolver,
        engine=AccessDecisionEngine(harden_user_mutations=harden_user_mutations),
        organization_repo=organization_repo,
        role_repo=role_repo,
        task_repo=task_repo,
    )
    audit = AuditService(audit_repo=MemoryAuditLogRepository(store), gateway=gateway)
    return Services(
        gateway=gateway,
        scope_resolver=scope_resolver,
        tasks=TaskService(task_repo=task_repo, gateway=gateway, audit=audit),
        users=UserService(
            user_repo=user_repo,
            role_repo=role_repo,
            organization_repo=organization_repo,
            password_hasher=PlainHasher(),
            gateway=gateway,
            audit=audit,
        ),
        organizations=OrganizationService(
            organization_repo=organization_repo, gateway=gateway, audit=audit
        ),
        audit=audit,
    )


@pytest.fixture
def world() -> World:
    return _seed()


@pytest.fixture
def services(world: World) -> Services:
    return make_services(world.store)


@pytest.fixture
def hardened(world: World) -> Services:
    return make_services(world.store, harden_user_mutations=True)
