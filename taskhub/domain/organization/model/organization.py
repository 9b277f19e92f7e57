"""Organization aggregate."""

from datetime import UTC, datetime

from pydantic import BaseModel

from taskhub.domain.shared.model.entity import Aggregate
from taskhub.domain.shared.model.value import OrganizationId, new_id


class Organization(Aggregate):
    """A tenant in the organization tree.

    Level 0 is a main (root) organization, level 1 a sub-organization.

    Invariants:
    - `level` is 0 without a parent, otherwise parent.level + 1
    - a sub-organization's parent is an active root organization
    """

    id: OrganizationId
    name: str
    parent_id: OrganizationId | None = None
    level: int = 0
    is_active: bool = True
    created_at: datetime
    updated_at: datetime | None = None

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    @classmethod
    def create(cls, name: str, parent: "Organization | None" = None) -> "Organization":
        return cls(
            id=OrganizationId(new_id()),
            name=name,
            parent_id=parent.id if parent is not None else None,
            level=level_under(parent),
            created_at=datetime.now(UTC),
        )

    def move_under(self, parent: "Organization | None") -> None:
        """Re-parent this organization and recompute its level. None makes it a root."""
        self.parent_id = parent.id if parent is not None else None
        self.level = level_under(parent)
        self.updated_at = datetime.now(UTC)

    def apply(self, changes: "OrganizationChanges") -> None:
        if changes.name is not None:
            self.name = changes.name
        if changes.is_active is not None:
            self.is_active = changes.is_active
        self.updated_at = datetime.now(UTC)


def level_under(parent: Organization | None) -> int:
    """Level of an organization created under `parent` (0 for a root)."""
    return 0 if parent is None else parent.level + 1


class NewOrganization(BaseModel):
    name: str
    parent_id: OrganizationId | None = None


class OrganizationChanges(BaseModel):
    name: str | None = None
    parent_id: OrganizationId | None = None
    is_active: bool | None = None
