"""Repository port for the User aggregate."""

from abc import abstractmethod
from typing import Protocol

from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import OrganizationId, UserId
from taskhub.domain.shared.port import Port
from taskhub.domain.user.model.user import User


class UserRepository(Port, Protocol):
    @abstractmethod
    async def get(self, user_id: UserId) -> User | None:
        """Get a user by ID."""
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> User | None:
        """Get a user by email address."""
        ...

    @abstractmethod
    async def list_by_organization(self, organization_id: OrganizationId) -> list[User]:
        """List users whose organization is `organization_id`."""
        ...

    @abstractmethod
    async def list_scoped(self, scope: ScopeFilter) -> list[User]:
        """List users inside `scope`, ordered by first then last name."""
        ...

    @abstractmethod
    async def save(self, user: User) -> None:
        """Save a user (create or update)."""
        ...

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        """Hard-delete a user row."""
        ...
