"""Task ports."""

from .repository import TaskRepository

__all__ = ["TaskRepository"]
