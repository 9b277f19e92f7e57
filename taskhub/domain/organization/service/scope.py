"""Organization tree scope resolver.

Computes, from current tree state, the organization ids an actor may read or
write. Nothing is cached: every call reads the tree again, so structural
changes take effect on the next request.
"""

import logging

from taskhub.domain.auth.model.actor import Actor, ActorTier
from taskhub.domain.organization.model.organization import Organization
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.shared.authorization.scope import (
    ALL_ORGANIZATIONS,
    EMPTY_SCOPE,
    ScopeFilter,
    scope_of,
)
from taskhub.domain.shared.model.value import OrganizationId
from taskhub.domain.shared.service import Service
from taskhub.domain.user.port.repository import UserRepository

logger = logging.getLogger(__name__)


def allows_child_org(actor: Actor, parent: Organization) -> bool:
    """Pure form of the child-organization rule, given the loaded parent."""
    if actor.is_super_admin:
        return parent.level == 0
    if actor.is_root_owner:
        return parent.id == actor.organization_id
    return False


def allows_root_org(actor: Actor) -> bool:
    """Only the Super Admin creates main organizations."""
    return actor.is_super_admin


def is_deletable(child_count: int, member_count: int) -> bool:
    """An organization may be deleted only when it has no children and no users."""
    return child_count == 0 and member_count == 0


class ScopeResolver(Service):
    organization_repo: OrganizationRepository
    user_repo: UserRepository

    async def resolve(self, actor: Actor) -> ScopeFilter:
        """Return the scope of `actor`.

        - Super Admin: every organization.
        - Main-organization owner: its organization and that organization's children.
        - Admin/viewer: exactly its own organization.
        - Anyone else: nothing.
        """
        tier = actor.tier

        if tier == ActorTier.SUPER_ADMIN:
            return ALL_ORGANIZATIONS

        if tier == ActorTier.ROOT_OWNER:
            assert actor.organization_id is not None
            children = await self.organization_repo.list_children(actor.organization_id)
            scope = scope_of([actor.organization_id, *(child.id for child in children)])
            logger.debug(
                "Scope resolved: actor=%s tier=%s orgs=%d", actor, tier, len(scope.org_ids)
            )
            return scope

        if tier == ActorTier.MEMBER:
            return scope_of([actor.organization_id])

        logger.debug("Scope resolved to nothing: actor=%s role=%s", actor, actor.role_type)
        return EMPTY_SCOPE

    async def can_create_child_org(self, actor: Actor, parent_id: OrganizationId) -> bool:
        parent = await self.organization_repo.get(parent_id)
        if parent is None:
            return False
        return allows_child_org(actor, parent)

    async def count_dependents(self, organization_id: OrganizationId) -> tuple[int, int]:
        """Return (child organization count, user count) for an organization."""
        children = await self.organization_repo.list_children(organization_id)
        members = await self.user_repo.list_by_organization(organization_id)
        return len(children), len(members)

    async def can_delete_org(self, organization: Organization) -> bool:
        child_count, member_count = await self.count_dependents(organization.id)
        return is_deletable(child_count, member_count)
