"""Repository port for the Organization aggregate."""

from abc import abstractmethod
from typing import Protocol

from taskhub.domain.organization.model.organization import Organization
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import OrganizationId
from taskhub.domain.shared.port import Port


class OrganizationRepository(Port, Protocol):
    @abstractmethod
    async def get(self, organization_id: OrganizationId) -> Organization | None:
        """Get an organization by ID."""
        ...

    @abstractmethod
    async def list_children(self, parent_id: OrganizationId) -> list[Organization]:
        """List organizations whose parent is `parent_id`, ordered by name."""
        ...

    @abstractmethod
    async def list_scoped(self, scope: ScopeFilter) -> list[Organization]:
        """List organizations inside `scope`, ordered by level then name."""
        ...

    @abstractmethod
    async def save(self, organization: Organization) -> None:
        """Save an organization (create or update)."""
        ...

    @abstractmethod
    async def delete(self, organization_id: OrganizationId) -> None:
        """Hard-delete an organization row."""
        ...
