"""DI provider for the authorization core and the domain services built on it."""

import logging

from dishka import from_context, provide

from taskhub.config import Config
from taskhub.domain.audit.port.repository import AuditLogRepository
from taskhub.domain.audit.service.audit import AuditService
from taskhub.domain.auth.port.role_repository import RoleRepository
from taskhub.domain.auth.service.access import AccessDecisionEngine, validate_coverage
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.organization.service.organization import OrganizationService
from taskhub.domain.organization.service.scope import ScopeResolver
from taskhub.domain.task.service.task import TaskService
from taskhub.domain.user.port.password import PasswordHasher
from taskhub.domain.user.port.repository import UserRepository
from taskhub.domain.user.service.user import UserService
from taskhub.util.di.base import Provider
from taskhub.util.di.scope import Scope

logger = logging.getLogger(__name__)


class AuthzProvider(Provider):
    """Wires the scope resolver, decision engine, gateway and domain services."""

    config = from_context(provides=Config, scope=Scope.APP)

    @provide(scope=Scope.APP)
    def get_engine(self, config: Config) -> AccessDecisionEngine:
        validate_coverage()
        logger.info(
            "Access decision engine ready: harden_user_mutations=%s",
            config.authz.harden_user_mutations,
        )
        return AccessDecisionEngine(harden_user_mutations=config.authz.harden_user_mutations)

    scope_resolver = provide(ScopeResolver, scope=Scope.UOW)
    gateway = provide(AuthorizationGateway, scope=Scope.UOW)

    # Services
    task_service = provide(TaskService, scope=Scope.UOW)
    organization_service = provide(OrganizationService, scope=Scope.UOW)

    @provide(scope=Scope.UOW)
    def get_audit_service(
        self,
        config: Config,
        audit_repo: AuditLogRepository,
        gateway: AuthorizationGateway,
    ) -> AuditService:
        return AuditService(
            audit_repo=audit_repo,
            gateway=gateway,
            audit_log_limit=config.authz.audit_log_limit,
        )

    @provide(scope=Scope.UOW)
    def get_user_service(
        self,
        config: Config,
        user_repo: UserRepository,
        role_repo: RoleRepository,
        organization_repo: OrganizationRepository,
        password_hasher: PasswordHasher,
        gateway: AuthorizationGateway,
        audit: AuditService,
    ) -> UserService:
        return UserService(
            user_repo=user_repo,
            role_repo=role_repo,
            organization_repo=organization_repo,
            password_hasher=password_hasher,
            gateway=gateway,
            audit=audit,
            default_password=config.authz.default_password,
        )
