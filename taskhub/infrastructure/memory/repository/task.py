"""In-memory implementation of TaskRepository."""

from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.model.value import TaskId, UserId
from taskhub.domain.task.model.task import Task
from taskhub.domain.task.port.repository import TaskRepository
from taskhub.infrastructure.memory.store import MemoryStore


class MemoryTaskRepository(TaskRepository):
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def get(self, task_id: TaskId) -> Task | None:
        task = self.store.tasks.get(task_id)
        if task is None or not task.is_active:
            return None
        return task.model_copy(deep=True)

    async def list_active(self, scope: ScopeFilter) -> list[Task]:
        tasks = [
            t
            for t in reversed(self.store.tasks.values())
            if t.is_active and scope.contains(t.organization_id)
        ]
        tasks.sort(key=lambda t: t.created_at, reverse=True)
        return [t.model_copy(deep=True) for t in tasks]

    async def count_created_or_assigned_to(self, user_id: UserId) -> int:
        return sum(
            1
            for t in self.store.tasks.values()
            if t.created_by_id == user_id or t.assigned_user_id == user_id
        )

    async def save(self, task: Task) -> None:
        self.store.tasks[task.id] = task.model_copy(deep=True)
