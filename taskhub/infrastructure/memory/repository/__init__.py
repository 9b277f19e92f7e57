from .audit import MemoryAuditLogRepository
from .organization import MemoryOrganizationRepository
from .role import MemoryRoleRepository
from .task import MemoryTaskRepository
from .user import MemoryUserRepository

__all__ = [
    "MemoryAuditLogRepository",
    "MemoryOrganizationRepository",
    "MemoryRoleRepository",
    "MemoryTaskRepository",
    "MemoryUserRepository",
]
