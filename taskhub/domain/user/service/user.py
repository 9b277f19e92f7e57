from dataclasses import replace

import logfire

from taskhub.domain.audit.service.audit import AuditService
from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.model.role import Role
from taskhub.domain.auth.port.role_repository import RoleRepository
from taskhub.domain.auth.service.access import Resource
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.auth.service.hierarchy import can_assign_role
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.error import InvariantViolationError, NotFoundError
from taskhub.domain.shared.model.value import OrganizationId, UserId
from taskhub.domain.shared.service import Service
from taskhub.domain.user.model.user import NewUser, User, UserChanges
from taskhub.domain.user.port.password import PasswordHasher
from taskhub.domain.user.port.repository import UserRepository


class UserService(Service):
    user_repo: UserRepository
    role_repo: RoleRepository
    organization_repo: OrganizationRepository
    password_hasher: PasswordHasher
    gateway: AuthorizationGateway
    audit: AuditService
    default_password: str = "password123"

    async def create(self, actor: Actor, details: NewUser) -> User:
        with logfire.span("CreateUser"):
            allowed = await self.gateway.require(
                actor,
                Action.USER_CREATE,
                Resource(organization_id=details.organization_id, role_id=details.role_id),
            )
            await self._ensure_email_free(details.email)

            user = User.create(
                email=details.email,
                password_hash=self.password_hasher.hash(details.password or self.default_password),
                first_name=details.first_name,
                last_name=details.last_name,
                role_id=details.role_id,
                organization_id=allowed.organization_id,
            )
            await self.user_repo.save(user)
            await self.audit.record(actor, Action.USER_CREATE, user.id, user.organization_id)

            logfire.info("User created", user_id=user.id, organization_id=user.organization_id)
            return user

    async def list_users(
        self,
        actor: Actor,
        organization_id: OrganizationId | None = None,
    ) -> list[User]:
        """Users inside the actor's scope, ordered by name. The caller is never listed."""
        allowed = await self.gateway.require(
            actor, Action.USER_LIST, Resource(organization_id=organization_id)
        )
        assert allowed.scope is not None
        if allowed.scope.is_empty:
            return []
        users = await self.user_repo.list_scoped(allowed.scope)
        return [u for u in users if u.id != actor.user_id]

    async def list_by_organization(
        self,
        actor: Actor,
        organization_id: OrganizationId,
    ) -> list[User]:
        await self.gateway.require(
            actor, Action.USER_LIST, Resource(organization_id=organization_id)
        )
        users = await self.user_repo.list_by_organization(organization_id)
        return sorted(
            (u for u in users if u.id != actor.user_id),
            key=lambda u: (u.first_name, u.last_name),
        )

    async def get(self, actor: Actor, user_id: UserId) -> User:
        self.gateway.precheck(actor, Action.USER_READ)
        user = await self._load(user_id)
        await self.gateway.require(actor, Action.USER_READ, _describe(user))
        return user

    async def update(self, actor: Actor, user_id: UserId, changes: UserChanges) -> User:
        with logfire.span("UpdateUser"):
            self.gateway.precheck(actor, Action.USER_UPDATE)
            user = await self._load(user_id)
            await self.gateway.require(
                actor,
                Action.USER_UPDATE,
                replace(
                    _describe(user),
                    new_organization_id=(
                        changes.organization_id
                        if changes.organization_id != user.organization_id
                        else None
                    ),
                    new_role_id=changes.role_id if changes.role_id != user.role_id else None,
                ),
            )

            if changes.email and changes.email != user.email:
                await self._ensure_email_free(changes.email)
            if changes.organization_id is not None:
                if await self.organization_repo.get(changes.organization_id) is None:
                    raise NotFoundError(f"Organization not found: {changes.organization_id}")
            if changes.role_id is not None:
                if await self.role_repo.get(changes.role_id) is None:
                    raise NotFoundError(f"Role not found: {changes.role_id}")

            password_hash = (
                self.password_hasher.hash(changes.password) if changes.password else None
            )
            user.apply(changes, password_hash=password_hash)
            await self.user_repo.save(user)
            await self.audit.record(actor, Action.USER_UPDATE, user.id, user.organization_id)

            logfire.info("User updated", user_id=user.id)
            return user

    async def delete(self, actor: Actor, user_id: UserId) -> None:
        """Hard-delete a user that never created nor was assigned a task."""
        with logfire.span("DeleteUser"):
            self.gateway.precheck(actor, Action.USER_DELETE)
            user = await self._load(user_id)
            await self.gateway.require(actor, Action.USER_DELETE, _describe(user))

            await self.user_repo.delete(user.id)
            await self.audit.record(actor, Action.USER_DELETE, user.id, user.organization_id)

            logfire.info("User deleted", user_id=user.id)

    async def available_roles(self, actor: Actor) -> list[Role]:
        """Active roles the actor may give to a new user."""
        allowed = await self.gateway.require(actor, Action.ROLE_LIST)
        assert allowed.scope is not None
        if allowed.scope.is_empty:
            return []

        levels = {o.id: o.level for o in await self.organization_repo.list_scoped(allowed.scope)}
        roles = await self.role_repo.list_scoped(allowed.scope)
        return [
            role
            for role in roles
            if role.is_active
            and can_assign_role(
                actor,
                allowed.scope,
                role,
                levels.get(role.organization_id, 0) if role.organization_id else 0,
            )
        ]

    async def _load(self, user_id: UserId) -> User:
        user = await self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError(f"User not found: {user_id}")
        return user

    async def _ensure_email_free(self, email: str) -> None:
        if await self.user_repo.get_by_email(email) is not None:
            raise InvariantViolationError("User with this email already exists", field="email")


def _describe(user: User) -> Resource:
    return Resource(id=user.id, organization_id=user.organization_id, role_id=user.role_id)
