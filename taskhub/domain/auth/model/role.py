"""Role types and the persisted Role entity."""

from enum import StrEnum

from pydantic import Field, model_validator
from typing_extensions import Self

from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.shared.model.entity import Entity
from taskhub.domain.shared.model.value import OrganizationId, RoleId, new_id


class RoleType(StrEnum):
    """Role kinds. Ranked OWNER > ADMIN > VIEWER within one organization."""

    OWNER = "owner"
    ADMIN = "admin"
    VIEWER = "viewer"


class Role(Entity):
    """A named role, scoped to one organization or global when organization_id is None.

    Invariants:
    - a global role (no organization) is always an OWNER role: the Super Admin role
    - `permissions` is the stored set; it is seeded from the catalog on creation
      and never recomputed afterwards
    """

    id: RoleId
    name: str
    type: RoleType
    organization_id: OrganizationId | None = None
    permissions: frozenset[PermissionType] = Field(default_factory=frozenset)
    is_active: bool = True

    @model_validator(mode="after")
    def global_roles_are_owners(self) -> Self:
        if self.organization_id is None and self.type != RoleType.OWNER:
            raise ValueError(f"Global role {self.name!r} must be of type owner, got {self.type}")
        return self

    @property
    def is_global(self) -> bool:
        return self.organization_id is None

    @classmethod
    def create(
        cls,
        name: str,
        type: RoleType,
        organization_id: OrganizationId | None = None,
        permissions: frozenset[PermissionType] | None = None,
    ) -> "Role":
        """Create a role, seeding its permission set from the catalog when none is given."""
        from taskhub.domain.auth.model.catalog import default_permissions

        return cls(
            id=RoleId(new_id()),
            name=name,
            type=type,
            organization_id=organization_id,
            permissions=default_permissions(type) if permissions is None else permissions,
        )
