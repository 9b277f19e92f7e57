"""In-memory implementation of RoleRepository."""

from taskhub.domain.auth.model.role import Role
from taskhub.domain.auth.port.role_repository import RoleRepository
from taskhub.domain.shared.authorization.scope import ScopeFilter, ScopeKind
from taskhub.domain.shared.model.value import RoleId
from taskhub.infrastructure.memory.store import MemoryStore


class MemoryRoleRepository(RoleRepository):
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def get(self, role_id: RoleId) -> Role | None:
        role = self.store.roles.get(role_id)
        return role.model_copy(deep=True) if role else None

    async def list_scoped(self, scope: ScopeFilter) -> list[Role]:
        def visible(role: Role) -> bool:
            if role.is_global:
                return scope.kind == ScopeKind.ALL
            return scope.contains(role.organization_id)

        roles = [r for r in self.store.roles.values() if visible(r)]
        return [r.model_copy(deep=True) for r in sorted(roles, key=lambda r: (r.type, r.name))]

    async def save(self, role: Role) -> None:
        self.store.roles[role.id] = role.model_copy(deep=True)
