"""Authorization actions: all operations subject to access control."""

from enum import StrEnum


class ResourceType(StrEnum):
    ORGANIZATION = "organization"
    USER = "user"
    ROLE = "role"
    TASK = "task"
    AUDIT_LOG = "audit_log"


class Action(StrEnum):
    """Structured enum of all authorization-relevant operations."""

    # Tasks
    TASK_CREATE = "task:create"
    TASK_LIST = "task:list"
    TASK_READ = "task:read"
    TASK_UPDATE = "task:update"
    TASK_DELETE = "task:delete"

    # Users
    USER_CREATE = "user:create"
    USER_LIST = "user:list"
    USER_READ = "user:read"
    USER_UPDATE = "user:update"
    USER_DELETE = "user:delete"

    # Roles (assignable roles listing)
    ROLE_LIST = "role:list"

    # Organizations
    ORGANIZATION_CREATE = "organization:create"
    ORGANIZATION_LIST = "organization:list"
    ORGANIZATION_READ = "organization:read"
    ORGANIZATION_UPDATE = "organization:update"
    ORGANIZATION_DELETE = "organization:delete"

    # Audit
    AUDIT_LOG_READ = "audit_log:read"

    @property
    def resource_type(self) -> ResourceType:
        return ResourceType(self.value.split(":", 1)[0])

    @property
    def verb(self) -> str:
        return self.value.split(":", 1)[1]
