"""DI provider binding the in-memory adapters to the domain ports."""

from dishka import provide

from taskhub.config import Config
from taskhub.domain.audit.port.repository import AuditLogRepository
from taskhub.domain.auth.port.role_repository import RoleRepository
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.task.port.repository import TaskRepository
from taskhub.domain.user.port.password import PasswordHasher
from taskhub.domain.user.port.repository import UserRepository
from taskhub.infrastructure.memory.repository import (
    MemoryAuditLogRepository,
    MemoryOrganizationRepository,
    MemoryRoleRepository,
    MemoryTaskRepository,
    MemoryUserRepository,
)
from taskhub.infrastructure.memory.store import MemoryStore
from taskhub.infrastructure.security import BcryptPasswordHasher
from taskhub.util.di.base import Provider
from taskhub.util.di.scope import Scope


class MemoryInfraProvider(Provider):
    """In-process adapters. The store is shared for the container's lifetime."""

    @provide(scope=Scope.APP)
    def get_store(self) -> MemoryStore:
        return MemoryStore()

    @provide(scope=Scope.APP)
    def get_password_hasher(self, config: Config) -> PasswordHasher:
        return BcryptPasswordHasher(rounds=config.authz.password_rounds)

    # UOW-scoped repositories
    organization_repo = provide(
        MemoryOrganizationRepository,
        scope=Scope.UOW,
        provides=OrganizationRepository,
    )
    role_repo = provide(
        MemoryRoleRepository,
        scope=Scope.UOW,
        provides=RoleRepository,
    )
    user_repo = provide(
        MemoryUserRepository,
        scope=Scope.UOW,
        provides=UserRepository,
    )
    task_repo = provide(
        MemoryTaskRepository,
        scope=Scope.UOW,
        provides=TaskRepository,
    )
    audit_repo = provide(
        MemoryAuditLogRepository,
        scope=Scope.UOW,
        provides=AuditLogRepository,
    )
