"""Authorization gateway: the entry point services call before touching data.

The gateway runs the coarse gate first. Only when it passes does it read
the organization/role/user/task state the decision depends on, then hands
that snapshot to the pure AccessDecisionEngine. It never writes.
"""

import logging
from dataclasses import replace

from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.port.role_repository import RoleRepository
from taskhub.domain.auth.service.access import AccessContext, AccessDecisionEngine, Resource
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.organization.service.scope import ScopeResolver
from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.authorization.decision import Allow, Decision, Deny
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import UserId
from taskhub.domain.shared.service import Service
from taskhub.domain.task.port.repository import TaskRepository

logger = logging.getLogger(__name__)


class AuthorizationGateway(Service):
    scope_resolver: ScopeResolver
    engine: AccessDecisionEngine
    organization_repo: OrganizationRepository
    role_repo: RoleRepository
    task_repo: TaskRepository

    async def authorize(
        self,
        actor: Actor,
        action: Action,
        resource: Resource | None = None,
    ) -> Decision:
        """Decide whether `actor` may perform `action` on `resource`.

        Returns Allow (with a scope filter for list queries and the target
        organization for creation) or Deny with a reason code.
        """
        resource = resource or Resource()

        denied = self.engine.gate(actor, action)
        if denied is not None:
            return self._log(actor, action, denied)

        context = await self._gather(actor, action, resource)
        return self._log(actor, action, self.engine.decide(actor, action, resource, context))

    async def require(
        self,
        actor: Actor,
        action: Action,
        resource: Resource | None = None,
    ) -> Allow:
        """Like `authorize`, but raise the mapped DomainError on denial."""
        return (await self.authorize(actor, action, resource)).raise_for_deny()

    def precheck(self, actor: Actor, action: Action) -> None:
        """Run only the role/permission gate, before a resource is loaded.

        Services call this ahead of a lookup so a permission failure is
        reported before a missing resource is.
        """
        denied = self.engine.gate(actor, action)
        if denied is not None:
            self._log(actor, action, denied)
            denied.raise_for_deny()

    async def resolve_scope(self, actor: Actor) -> ScopeFilter:
        return await self.scope_resolver.resolve(actor)

    async def _gather(self, actor: Actor, action: Action, resource: Resource) -> AccessContext:
        scope = await self.scope_resolver.resolve(actor)
        repo = self.organization_repo

        if action == Action.TASK_CREATE and resource.organization_id is not None:
            return AccessContext(scope=scope, organization=await repo.get(resource.organization_id))

        if action == Action.USER_CREATE:
            organization = (
                await repo.get(resource.organization_id)
                if resource.organization_id is not None
                else None
            )
            role = await self.role_repo.get(resource.role_id) if resource.role_id else None
            role_organization = (
                await repo.get(role.organization_id)
                if role is not None and role.organization_id is not None
                else None
            )
            return AccessContext(
                scope=scope,
                organization=organization,
                role=role,
                role_organization=role_organization,
            )

        if action in (Action.USER_UPDATE, Action.USER_DELETE):
            context = AccessContext(scope=scope)
            if self.engine.harden_user_mutations:
                context = AccessContext(
                    scope=scope,
                    organization=(
                        await repo.get(resource.organization_id)
                        if resource.organization_id is not None
                        else None
                    ),
                    role=await self.role_repo.get(resource.role_id) if resource.role_id else None,
                )
            if self.engine.harden_user_mutations and action == Action.USER_UPDATE:
                new_role = (
                    await self.role_repo.get(resource.new_role_id) if resource.new_role_id else None
                )
                context = replace(
                    context,
                    new_organization=(
                        await repo.get(resource.new_organization_id)
                        if resource.new_organization_id is not None
                        else None
                    ),
                    new_role=new_role,
                    new_role_organization=(
                        await repo.get(new_role.organization_id)
                        if new_role is not None and new_role.organization_id is not None
                        else None
                    ),
                )
            if action == Action.USER_DELETE and resource.id is not None:
                task_count = await self.task_repo.count_created_or_assigned_to(UserId(resource.id))
                context = replace(context, task_count=task_count)
            return context

        if action == Action.ORGANIZATION_CREATE and resource.parent_id is not None:
            return AccessContext(scope=scope, parent=await repo.get(resource.parent_id))

        if action == Action.ORGANIZATION_UPDATE and resource.parent_id is not None:
            children = (
                await repo.list_children(resource.organization_id)
                if resource.organization_id is not None
                else []
            )
            return AccessContext(
                scope=scope,
                parent=await repo.get(resource.parent_id),
                child_count=len(children),
            )

        if action == Action.ORGANIZATION_DELETE and resource.organization_id is not None:
            child_count, member_count = await self.scope_resolver.count_dependents(
                resource.organization_id
            )
            return AccessContext(scope=scope, child_count=child_count, member_count=member_count)

        return AccessContext(scope=scope)

    def _log(self, actor: Actor, action: Action, decision: Decision) -> Decision:
        if isinstance(decision, Deny):
            logger.warning(
                "Authorization denied: actor=%s action=%s reason=%s",
                actor,
                action,
                decision.reason,
            )
        else:
            logger.info("Authorization allowed: actor=%s action=%s", actor, action)
        return decision
