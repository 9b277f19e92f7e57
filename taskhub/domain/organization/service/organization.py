import logfire

from taskhub.domain.audit.service.audit import AuditService
from taskhub.domain.auth.model.actor import Actor, ActorTier
from taskhub.domain.auth.service.access import Resource
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.organization.model.organization import (
    NewOrganization,
    Organization,
    OrganizationChanges,
)
from taskhub.domain.organization.model.tree import OrganizationNode, build_hierarchy
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.authorization.scope import ALL_ORGANIZATIONS, scope_of
from taskhub.domain.shared.error import NotFoundError
from taskhub.domain.shared.model.value import OrganizationId
from taskhub.domain.shared.service import Service


class OrganizationService(Service):
    organization_repo: OrganizationRepository
    gateway: AuthorizationGateway
    audit: AuditService

    async def list_organizations(self, actor: Actor) -> list[Organization]:
        """Organizations visible to the actor, ordered by level then name."""
        allowed = await self.gateway.require(actor, Action.ORGANIZATION_LIST)
        assert allowed.scope is not None
        if allowed.scope.is_empty:
            return []
        return await self.organization_repo.list_scoped(allowed.scope)

    async def hierarchy(self, actor: Actor) -> list[OrganizationNode]:
        """Visible organizations nested under their parents."""
        return build_hierarchy(await self.list_organizations(actor))

    async def available_for(self, actor: Actor) -> list[Organization]:
        """Active organizations the actor can place new tasks and users in.

        A main-organization owner is offered its sub-organizations only.
        """
        await self.gateway.require(actor, Action.ORGANIZATION_LIST)

        tier = actor.tier
        if tier == ActorTier.SUPER_ADMIN:
            organizations = await self.organization_repo.list_scoped(ALL_ORGANIZATIONS)
        elif tier == ActorTier.ROOT_OWNER:
            assert actor.organization_id is not None
            organizations = await self.organization_repo.list_children(actor.organization_id)
        elif tier == ActorTier.MEMBER:
            organizations = await self.organization_repo.list_scoped(
                scope_of([actor.organization_id])
            )
        else:
            organizations = []
        return [o for o in organizations if o.is_active]

    async def get(self, actor: Actor, organization_id: OrganizationId) -> Organization:
        organization = await self._load(organization_id)
        await self.gateway.require(
            actor, Action.ORGANIZATION_READ, Resource(organization_id=organization.id)
        )
        return organization

    async def create(self, actor: Actor, details: NewOrganization) -> Organization:
        with logfire.span("CreateOrganization"):
            await self.gateway.require(
                actor, Action.ORGANIZATION_CREATE, Resource(parent_id=details.parent_id)
            )
            parent = await self._load(details.parent_id) if details.parent_id else None

            organization = Organization.create(details.name, parent=parent)
            await self.organization_repo.save(organization)
            await self.audit.record(
                actor, Action.ORGANIZATION_CREATE, organization.id, organization.id
            )

            logfire.info(
                "Organization created", organization_id=organization.id, level=organization.level
            )
            return organization

    async def update(
        self,
        actor: Actor,
        organization_id: OrganizationId,
        changes: OrganizationChanges,
    ) -> Organization:
        with logfire.span("UpdateOrganization"):
            self.gateway.precheck(actor, Action.ORGANIZATION_UPDATE)
            organization = await self._load(organization_id)
            # An explicit parent_id=None detaches; an omitted one leaves the parent alone.
            parent_changed = (
                "parent_id" in changes.model_fields_set
                and changes.parent_id != organization.parent_id
            )
            new_parent_id = changes.parent_id if parent_changed else None
            await self.gateway.require(
                actor,
                Action.ORGANIZATION_UPDATE,
                Resource(
                    organization_id=organization.id,
                    parent_id=new_parent_id,
                    make_root=parent_changed and new_parent_id is None,
                ),
            )

            if parent_changed:
                organization.move_under(
                    await self._load(new_parent_id) if new_parent_id is not None else None
                )
            organization.apply(changes)
            await self.organization_repo.save(organization)
            await self.audit.record(
                actor, Action.ORGANIZATION_UPDATE, organization.id, organization.id
            )

            logfire.info("Organization updated", organization_id=organization.id)
            return organization

    async def delete(self, actor: Actor, organization_id: OrganizationId) -> None:
        """Hard-delete an organization without children or users."""
        with logfire.span("DeleteOrganization"):
            self.gateway.precheck(actor, Action.ORGANIZATION_DELETE)
            organization = await self._load(organization_id)
            await self.gateway.require(
                actor, Action.ORGANIZATION_DELETE, Resource(organization_id=organization.id)
            )

            await self.organization_repo.delete(organization.id)
            await self.audit.record(
                actor, Action.ORGANIZATION_DELETE, organization.id, organization.id
            )

            logfire.info("Organization deleted", organization_id=organization.id)

    async def _load(self, organization_id: OrganizationId) -> Organization:
        organization = await self.organization_repo.get(organization_id)
        if organization is None:
            raise NotFoundError(f"Organization not found: {organization_id}")
        return organization
