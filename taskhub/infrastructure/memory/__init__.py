from .di import MemoryInfraProvider
from .store import MemoryStore

__all__ = ["MemoryInfraProvider", "MemoryStore"]
