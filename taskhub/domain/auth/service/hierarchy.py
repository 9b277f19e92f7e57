"""Role hierarchy evaluator.

Two distinct permission checks are kept apart. They are defined next to the
data they read and re-exported here:

- ``has_permission`` is the coarse check. It consults the static catalog for a
  role *type* and ignores whatever custom set a persisted role was given.
- ``holds_permission`` is the fine check. It consults the actor's resolved
  (stored) permission set.

Gates that need a permission require both to pass.
"""

from taskhub.domain.auth.model.actor import Actor, ActorTier, holds_permission
from taskhub.domain.auth.model.catalog import has_permission
from taskhub.domain.auth.model.role import Role, RoleType
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import OrganizationId

RANKS: dict[RoleType, int] = {
    RoleType.OWNER: 3,
    RoleType.ADMIN: 2,
    RoleType.VIEWER: 1,
}

ASSIGNABLE_BY_ROOT_OWNER = (RoleType.ADMIN, RoleType.VIEWER)

__all__ = [
    "ASSIGNABLE_BY_ROOT_OWNER",
    "RANKS",
    "can_assign_role",
    "can_manage_user",
    "has_permission",
    "holds_permission",
    "outranks",
    "rank",
]


def rank(role_type: RoleType) -> int:
    """Numeric rank: OWNER=3, ADMIN=2, VIEWER=1."""
    return RANKS[role_type]


def outranks(role_type: RoleType, other: RoleType) -> bool:
    """Strict rank comparison. Only meaningful inside one organization."""
    return rank(role_type) > rank(other)


def can_manage_user(
    actor: Actor,
    scope: ScopeFilter,
    target_role_type: RoleType | None,
    target_organization_id: OrganizationId | None,
    target_organization_level: int | None,
) -> bool:
    """Decide whether `actor` may manage (update/delete) a user placed as described.

    - Super Admin manages everyone.
    - A main-organization owner manages users of its own organization, except
      other main-organization owners, and users of its sub-organizations.
    - An admin manages users of its own organization with a strictly lower rank.
    """
    tier = actor.tier

    if tier == ActorTier.SUPER_ADMIN:
        return True

    if tier == ActorTier.ROOT_OWNER:
        if target_organization_id == actor.organization_id:
            is_root_owner = (
                target_role_type == RoleType.OWNER and (target_organization_level or 0) == 0
            )
            return not is_root_owner
        return target_organization_level == 1 and scope.contains(target_organization_id)

    if tier == ActorTier.MEMBER and actor.role_type == RoleType.ADMIN:
        if target_organization_id != actor.organization_id or target_role_type is None:
            return False
        return outranks(actor.role_type, target_role_type)

    return False


def can_assign_role(
    actor: Actor,
    scope: ScopeFilter,
    role: Role,
    role_organization_level: int | None,
) -> bool:
    """Decide whether `actor` may give `role` to a user.

    - Super Admin may assign any role.
    - A main-organization owner may assign ADMIN/VIEWER roles that belong to
      one of its sub-organizations (never another main-organization OWNER).
    - An admin may assign roles that already exist in its own organization.
    """
    tier = actor.tier

    if tier == ActorTier.SUPER_ADMIN:
        return True

    if tier == ActorTier.ROOT_OWNER:
        return (
            role.type in ASSIGNABLE_BY_ROOT_OWNER
            and role_organization_level == 1
            and scope.contains(role.organization_id)
        )

    if tier == ActorTier.MEMBER and actor.role_type == RoleType.ADMIN:
        return role.organization_id is not None and role.organization_id == actor.organization_id

    return False
