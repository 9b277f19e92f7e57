import logfire

from taskhub.domain.audit.service.audit import AuditService
from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.service.access import Resource
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.error import NotFoundError
from taskhub.domain.shared.model.value import OrganizationId, TaskId
from taskhub.domain.shared.service import Service
from taskhub.domain.task.model.task import NewTask, Task, TaskChanges
from taskhub.domain.task.port.repository import TaskRepository


class TaskService(Service):
    task_repo: TaskRepository
    gateway: AuthorizationGateway
    audit: AuditService

    async def create(self, actor: Actor, details: NewTask) -> Task:
        with logfire.span("CreateTask"):
            allowed = await self.gateway.require(
                actor,
                Action.TASK_CREATE,
                Resource(organization_id=details.organization_id),
            )
            assert allowed.organization_id is not None

            task = Task.create(
                details,
                organization_id=allowed.organization_id,
                created_by_id=actor.user_id,
            )
            await self.task_repo.save(task)
            await self.audit.record(actor, Action.TASK_CREATE, task.id, task.organization_id)

            logfire.info("Task created", task_id=task.id, organization_id=task.organization_id)
            return task

    async def list_tasks(
        self,
        actor: Actor,
        organization_id: OrganizationId | None = None,
    ) -> list[Task]:
        """Active tasks visible to the actor, newest first.

        `organization_id` narrows the result to one organization; only the
        Super Admin and main-organization owners may pass it.
        """
        allowed = await self.gateway.require(
            actor, Action.TASK_LIST, Resource(organization_id=organization_id)
        )
        assert allowed.scope is not None
        if allowed.scope.is_empty:
            return []
        return await self.task_repo.list_active(allowed.scope)

    async def get(self, actor: Actor, task_id: TaskId) -> Task:
        self.gateway.precheck(actor, Action.TASK_READ)
        task = await self._load(task_id)
        await self.gateway.require(actor, Action.TASK_READ, _describe(task))
        return task

    async def update(self, actor: Actor, task_id: TaskId, changes: TaskChanges) -> Task:
        with logfire.span("UpdateTask"):
            self.gateway.precheck(actor, Action.TASK_UPDATE)
            task = await self._load(task_id)
            await self.gateway.require(actor, Action.TASK_UPDATE, _describe(task))

            task.apply(changes)
            await self.task_repo.save(task)
            await self.audit.record(actor, Action.TASK_UPDATE, task.id, task.organization_id)

            logfire.info("Task updated", task_id=task.id)
            return task

    async def delete(self, actor: Actor, task_id: TaskId) -> None:
        """Soft-delete: the task is deactivated, never removed."""
        with logfire.span("DeleteTask"):
            self.gateway.precheck(actor, Action.TASK_DELETE)
            task = await self._load(task_id)
            await self.gateway.require(actor, Action.TASK_DELETE, _describe(task))

            task.deactivate()
            await self.task_repo.save(task)
            await self.audit.record(actor, Action.TASK_DELETE, task.id, task.organization_id)

            logfire.info("Task deleted", task_id=task.id)

    async def _load(self, task_id: TaskId) -> Task:
        task = await self.task_repo.get(task_id)
        if task is None or not task.is_active:
            raise NotFoundError(f"Task not found: {task_id}")
        return task


def _describe(task: Task) -> Resource:
    return Resource(id=task.id, organization_id=task.organization_id)
