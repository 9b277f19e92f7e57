"""In-memory implementation of UserRepository."""

from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import OrganizationId, UserId
from taskhub.domain.user.model.user import User
from taskhub.domain.user.port.repository import UserRepository
from taskhub.infrastructure.memory.store import MemoryStore


def _by_name(user: User) -> tuple[str, str]:
    return user.first_name, user.last_name


class MemoryUserRepository(UserRepository):
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def get(self, user_id: UserId) -> User | None:
        user = self.store.users.get(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_by_email(self, email: str) -> User | None:
        user = next((u for u in self.store.users.values() if u.email == email), None)
        return user.model_copy(deep=True) if user else None

    async def list_by_organization(self, organization_id: OrganizationId) -> list[User]:
        users = [u for u in self.store.users.values() if u.organization_id == organization_id]
        return [u.model_copy(deep=True) for u in sorted(users, key=_by_name)]

    async def list_scoped(self, scope: ScopeFilter) -> list[User]:
        users = [u for u in self.store.users.values() if scope.contains(u.organization_id)]
        return [u.model_copy(deep=True) for u in sorted(users, key=_by_name)]

    async def save(self, user: User) -> None:
        self.store.users[user.id] = user.model_copy(deep=True)

    async def delete(self, user_id: UserId) -> None:
        self.store.users.pop(user_id, None)
