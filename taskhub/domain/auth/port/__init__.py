"""Auth ports."""

from .role_repository import RoleRepository

__all__ = ["RoleRepository"]
