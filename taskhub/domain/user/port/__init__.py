"""User ports."""

from .password import PasswordHasher
from .repository import UserRepository

__all__ = ["PasswordHasher", "UserRepository"]
