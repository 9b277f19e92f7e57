"""Permission catalog: the default permission set of each role type.

The catalog is authoritative only when a role is created. Afterwards, checks
against a real actor consult the role's stored permission set, except for the
coarse role-type checks of the hierarchy evaluator.
"""

from collections.abc import Mapping
from types import MappingProxyType

from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.auth.model.role import RoleType

ROLE_PERMISSIONS: Mapping[RoleType, frozenset[PermissionType]] = MappingProxyType(
    {
        RoleType.OWNER: frozenset(PermissionType),
        RoleType.ADMIN: frozenset(PermissionType) - {PermissionType.MANAGE_ORGANIZATIONS},
        RoleType.VIEWER: frozenset({PermissionType.READ_TASK, PermissionType.READ_AUDIT_LOG}),
    }
)


def default_permissions(role_type: RoleType) -> frozenset[PermissionType]:
    """Return the permission set a new role of this type starts with."""
    return ROLE_PERMISSIONS.get(role_type, frozenset())


def has_permission(role_type: RoleType, permission: PermissionType) -> bool:
    """True iff the catalog grants `permission` to every role of this type."""
    return permission in ROLE_PERMISSIONS.get(role_type, frozenset())
