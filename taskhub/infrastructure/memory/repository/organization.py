"""In-memory implementation of OrganizationRepository."""

from taskhub.domain.organization.model.organization import Organization
from taskhub.domain.organization.port.repository import OrganizationRepository
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import OrganizationId
from taskhub.infrastructure.memory.store import MemoryStore


class MemoryOrganizationRepository(OrganizationRepository):
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def get(self, organization_id: OrganizationId) -> Organization | None:
        organization = self.store.organizations.get(organization_id)
        return organization.model_copy(deep=True) if organization else None

    async def list_children(self, parent_id: OrganizationId) -> list[Organization]:
        children = [o for o in self.store.organizations.values() if o.parent_id == parent_id]
        return [o.model_copy(deep=True) for o in sorted(children, key=lambda o: o.name)]

    async def list_scoped(self, scope: ScopeFilter) -> list[Organization]:
        visible = [o for o in self.store.organizations.values() if scope.contains(o.id)]
        return [
            o.model_copy(deep=True) for o in sorted(visible, key=lambda o: (o.level, o.name))
        ]

    async def save(self, organization: Organization) -> None:
        self.store.organizations[organization.id] = organization.model_copy(deep=True)

    async def delete(self, organization_id: OrganizationId) -> None:
        self.store.organizations.pop(organization_id, None)
