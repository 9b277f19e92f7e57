"""User aggregate."""

from datetime import UTC, datetime

from pydantic import BaseModel

from taskhub.domain.shared.model.entity import Aggregate
from taskhub.domain.shared.model.value import OrganizationId, RoleId, UserId, new_id


class User(Aggregate):
    """A person who signs in and acts on tasks.

    Invariants:
    - `email` is unique across all users
    - `password_hash` never holds a plain-text password
    - `organization_id` is None only for Super Admin accounts
    """

    id: UserId
    email: str
    password_hash: str
    first_name: str
    last_name: str
    organization_id: OrganizationId | None = None
    role_id: RoleId
    is_active: bool = True
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        email: str,
        password_hash: str,
        first_name: str,
        last_name: str,
        role_id: RoleId,
        organization_id: OrganizationId | None = None,
    ) -> "User":
        return cls(
            id=UserId(new_id()),
            email=email,
            password_hash=password_hash,
            first_name=first_name,
            last_name=last_name,
            organization_id=organization_id,
            role_id=role_id,
            created_at=datetime.now(UTC),
        )

    def apply(self, changes: "UserChanges", password_hash: str | None = None) -> None:
        """Apply an update. `password_hash` replaces the stored hash when given."""
        values = changes.model_dump(exclude_unset=True, exclude={"password"})
        for name, value in values.items():
            if value is not None:
                setattr(self, name, value)
        if password_hash is not None:
            self.password_hash = password_hash
        self.updated_at = datetime.now(UTC)


class NewUser(BaseModel):
    email: str
    password: str | None = None
    first_name: str
    last_name: str
    organization_id: OrganizationId | None = None
    role_id: RoleId


class UserChanges(BaseModel):
    email: str | None = None
    password: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    organization_id: OrganizationId | None = None
    role_id: RoleId | None = None
    is_active: bool | None = None
