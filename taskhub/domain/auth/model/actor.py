"""Actor: the authenticated caller as presented to the authorization core."""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.auth.model.role import RoleType
from taskhub.domain.shared.model.value import OrganizationId, UserId

if TYPE_CHECKING:
    from taskhub.domain.auth.model.role import Role
    from taskhub.domain.organization.model.organization import Organization


class ActorTier(StrEnum):
    """Where an actor sits in the organization tree.

    SUPER_ADMIN: OWNER role without an organization; global scope.
    ROOT_OWNER: OWNER of a main (level 0) organization.
    MEMBER: ADMIN or VIEWER of an organization.
    NONE: anything else; no scope at all.
    """

    SUPER_ADMIN = "super_admin"
    ROOT_OWNER = "root_owner"
    MEMBER = "member"
    NONE = "none"


@dataclass(frozen=True)
class Actor:
    """The caller of a request, resolved per request by the API layer.

    Immutable. An unknown ``organization_level`` on an organization-bound
    owner is treated as 0.
    """

    user_id: UserId
    role_type: RoleType | None
    organization_id: OrganizationId | None = None
    organization_level: int | None = None
    permissions: frozenset[PermissionType] = field(default_factory=frozenset)

    @classmethod
    def from_state(
        cls,
        user_id: UserId,
        role: "Role | None",
        organization: "Organization | None" = None,
    ) -> "Actor":
        """Build an actor from the caller's persisted role and organization."""
        return cls(
            user_id=user_id,
            role_type=role.type if role is not None else None,
            organization_id=organization.id if organization is not None else None,
            organization_level=organization.level if organization is not None else None,
            permissions=role.permissions if role is not None else frozenset(),
        )

    @property
    def tier(self) -> ActorTier:
        if self.role_type == RoleType.OWNER:
            if self.organization_id is None:
                return ActorTier.SUPER_ADMIN
            if self.organization_level in (0, None):
                return ActorTier.ROOT_OWNER
            return ActorTier.NONE
        if self.role_type in (RoleType.ADMIN, RoleType.VIEWER) and self.organization_id is not None:
            return ActorTier.MEMBER
        return ActorTier.NONE

    @property
    def is_super_admin(self) -> bool:
        return self.tier == ActorTier.SUPER_ADMIN

    @property
    def is_root_owner(self) -> bool:
        return self.tier == ActorTier.ROOT_OWNER

    def has_role(self, *role_types: RoleType) -> bool:
        """Check the actor's role type is one of the given types (exact match)."""
        return self.role_type is not None and self.role_type in role_types

    def holds(self, permission: PermissionType) -> bool:
        """Check the actor's resolved (stored) permission set."""
        return permission in self.permissions

    def __str__(self) -> str:
        return str(self.user_id)


def holds_permission(actor: Actor, permission: PermissionType) -> bool:
    """True iff `permission` is in the actor's stored permission set."""
    return actor.holds(permission)
