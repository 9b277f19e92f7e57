"""In-memory implementation of AuditLogRepository."""

from taskhub.domain.audit.model.event import AuditEvent
from taskhub.domain.audit.port.repository import AuditLogRepository
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.infrastructure.memory.store import MemoryStore


class MemoryAuditLogRepository(AuditLogRepository):
    def __init__(self, store: MemoryStore) -> None:
        self.store = store

    async def append(self, event: AuditEvent) -> None:
        self.store.audit_events.append(event)

    async def list_recent(self, scope: ScopeFilter, limit: int) -> list[AuditEvent]:
        events = [e for e in reversed(self.store.audit_events) if scope.contains(e.organization_id)]
        events.sort(key=lambda e: e.created_at, reverse=True)
        return events[:limit]
