"""In-process store backing the memory adapters.

One store lives for the lifetime of the application container and is shared
by every repository, the way a database is shared by per-request sessions.
Aggregates are copied on the way in and out so callers never hold a live
reference to stored state.
"""

from dataclasses import dataclass, field

from taskhub.domain.audit.model.event import AuditEvent
from taskhub.domain.auth.model.role import Role
from taskhub.domain.organization.model.organization import Organization
from taskhub.domain.shared.model.value import OrganizationId, RoleId, TaskId, UserId
from taskhub.domain.task.model.task import Task
from taskhub.domain.user.model.user import User


@dataclass
class MemoryStore:
    organizations: dict[OrganizationId, Organization] = field(default_factory=dict)
    roles: dict[RoleId, Role] = field(default_factory=dict)
    users: dict[UserId, User] = field(default_factory=dict)
    tasks: dict[TaskId, Task] = field(default_factory=dict)
    audit_events: list[AuditEvent] = field(default_factory=list)
