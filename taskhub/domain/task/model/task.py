"""Task aggregate."""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel

from taskhub.domain.shared.model.entity import Aggregate
from taskhub.domain.shared.model.value import OrganizationId, TaskId, UserId, new_id


class TaskStatus(StrEnum):
    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskCategory(StrEnum):
    WORK = "work"
    PERSONAL = "personal"
    URGENT = "urgent"


class Task(Aggregate):
    """A unit of work owned by one organization.

    Deletion is soft: `is_active` turns False and the row stays.
    """

    id: TaskId
    title: str
    description: str | None = None
    status: TaskStatus = TaskStatus.TODO
    category: TaskCategory
    priority: int = 1
    due_date: datetime | None = None
    organization_id: OrganizationId
    assigned_user_id: UserId
    created_by_id: UserId
    is_active: bool = True
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def create(
        cls,
        details: "NewTask",
        organization_id: OrganizationId,
        created_by_id: UserId,
    ) -> "Task":
        now = datetime.now(UTC)
        return cls(
            id=TaskId(new_id()),
            title=details.title,
            description=details.description,
            status=details.status or TaskStatus.TODO,
            category=details.category,
            priority=details.priority or 1,
            due_date=details.due_date,
            organization_id=organization_id,
            assigned_user_id=details.assigned_user_id or created_by_id,
            created_by_id=created_by_id,
            created_at=now,
        )

    def apply(self, changes: "TaskChanges") -> None:
        for name, value in changes.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(self, name, value)
        self.updated_at = datetime.now(UTC)

    def deactivate(self) -> None:
        self.is_active = False
        self.updated_at = datetime.now(UTC)


class NewTask(BaseModel):
    title: str
    description: str | None = None
    status: TaskStatus | None = None
    category: TaskCategory
    priority: int | None = None
    due_date: datetime | None = None
    assigned_user_id: UserId | None = None
    organization_id: OrganizationId | None = None


class TaskChanges(BaseModel):
    """Editable task fields. Deactivation goes through `TaskService.delete` only."""

    title: str | None = None
    description: str | None = None
    status: TaskStatus | None = None
    category: TaskCategory | None = None
    priority: int | None = None
    due_date: datetime | None = None
    assigned_user_id: UserId | None = None
