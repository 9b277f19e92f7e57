"""Port for password hashing."""

from abc import abstractmethod
from typing import Protocol

from taskhub.domain.shared.port import Port


class PasswordHasher(Port, Protocol):
    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash of `password`."""
        ...

    @abstractmethod
    def verify(self, password: str, password_hash: str) -> bool:
        """Check `password` against a hash produced by `hash`."""
        ...
