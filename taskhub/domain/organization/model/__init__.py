"""Organization domain models."""

from .organization import NewOrganization, Organization, OrganizationChanges, level_under
from .tree import OrganizationNode, build_hierarchy

__all__ = [
    "NewOrganization",
    "Organization",
    "OrganizationChanges",
    "OrganizationNode",
    "build_hierarchy",
    "level_under",
]
