"""Repository port for Role persistence."""

from abc import abstractmethod
from typing import Protocol

from taskhub.domain.auth.model.role import Role
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import RoleId
from taskhub.domain.shared.port import Port


class RoleRepository(Port, Protocol):
    @abstractmethod
    async def get(self, role_id: RoleId) -> Role | None:
        """Get a role by ID."""
        ...

    @abstractmethod
    async def list_scoped(self, scope: ScopeFilter) -> list[Role]:
        """List roles whose organization is inside `scope`, ordered by type then name.

        Global roles are included only for an unrestricted scope.
        """
        ...

    @abstractmethod
    async def save(self, role: Role) -> None:
        """Save a role."""
        ...
