"""Base class for domain ports (interfaces implemented by infrastructure)."""

from typing import Protocol


class Port(Protocol):
    """Marker base for repository and gateway protocols consumed by the domain."""
