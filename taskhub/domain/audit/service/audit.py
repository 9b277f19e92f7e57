import logging

import logfire

from taskhub.domain.audit.model.event import AuditEvent
from taskhub.domain.audit.port.repository import AuditLogRepository
from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.service.gateway import AuthorizationGateway
from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.model.value import OrganizationId
from taskhub.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AuditService(Service):
    """Records one audit event per successful mutation and serves audit-log reads."""

    audit_repo: AuditLogRepository
    gateway: AuthorizationGateway
    audit_log_limit: int = 100

    async def record(
        self,
        actor: Actor,
        action: Action,
        resource_id: str | None = None,
        organization_id: OrganizationId | None = None,
        details: str | None = None,
    ) -> AuditEvent:
        event = AuditEvent(
            user_id=actor.user_id,
            action=action.verb,
            resource=action.resource_type.value,
            resource_id=resource_id,
            organization_id=organization_id,
            details=details,
        )
        await self.audit_repo.append(event)
        logger.info("[AUDIT] %s - %s", event.created_at.isoformat(), event.describe())
        return event

    async def list_for(self, actor: Actor) -> list[AuditEvent]:
        """Most recent audit events of the actor's own organization, newest first."""
        with logfire.span("ListAuditLogs"):
            allowed = await self.gateway.require(actor, Action.AUDIT_LOG_READ)
            assert allowed.scope is not None
            if allowed.scope.is_empty:
                return []
            return await self.audit_repo.list_recent(allowed.scope, self.audit_log_limit)
