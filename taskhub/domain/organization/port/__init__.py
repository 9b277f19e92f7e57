"""Organization ports."""

from .repository import OrganizationRepository

__all__ = ["OrganizationRepository"]
