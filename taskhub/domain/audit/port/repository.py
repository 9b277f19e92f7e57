"""Port for the external audit-log store."""

from abc import abstractmethod
from typing import Protocol

from taskhub.domain.audit.model.event import AuditEvent
from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.port import Port


class AuditLogRepository(Port, Protocol):
    @abstractmethod
    async def append(self, event: AuditEvent) -> None:
        """Durably store an audit event."""
        ...

    @abstractmethod
    async def list_recent(self, scope: ScopeFilter, limit: int) -> list[AuditEvent]:
        """List the `limit` most recent events inside `scope`, newest first."""
        ...
