"""Auth domain models."""

from .actor import Actor, ActorTier
from .catalog import ROLE_PERMISSIONS, default_permissions
from .permission import PermissionType
from .role import Role, RoleType

__all__ = [
    "Actor",
    "ActorTier",
    "PermissionType",
    "ROLE_PERMISSIONS",
    "Role",
    "RoleType",
    "default_permissions",
]
