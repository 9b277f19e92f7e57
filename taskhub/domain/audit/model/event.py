"""Audit events emitted by successful mutating operations."""

from taskhub.domain.shared.event import Event
from taskhub.domain.shared.model.value import OrganizationId, UserId


class AuditEvent(Event):
    """One audit-log entry: who did what to which resource, in which tenant."""

    user_id: UserId
    action: str
    resource: str
    resource_id: str | None = None
    organization_id: OrganizationId | None = None
    details: str | None = None

    def describe(self) -> str:
        target = f" ({self.resource_id})" if self.resource_id else ""
        return f"User {self.user_id} performed {self.action} on {self.resource}{target}"
