"""Repository port for the Task aggregate."""

from abc import abstractmethod
from typing import Protocol

from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import TaskId, UserId
from taskhub.domain.shared.port import Port
from taskhub.domain.task.model.task import Task


class TaskRepository(Port, Protocol):
    @abstractmethod
    async def get(self, task_id: TaskId) -> Task | None:
        """Get an active task by ID."""
        ...

    @abstractmethod
    async def list_active(self, scope: ScopeFilter) -> list[Task]:
        """List active tasks inside `scope`, newest first."""
        ...

    @abstractmethod
    async def count_created_or_assigned_to(self, user_id: UserId) -> int:
        """Count tasks, active or not, created by or assigned to the user."""
        ...

    @abstractmethod
    async def save(self, task: Task) -> None:
        """Save a task (create or update)."""
        ...
