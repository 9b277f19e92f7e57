"""User domain models."""

from .user import NewUser, User, UserChanges

__all__ = ["NewUser", "User", "UserChanges"]
