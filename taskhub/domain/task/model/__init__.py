"""Task domain models."""

from .task import NewTask, Task, TaskCategory, TaskChanges, TaskStatus

__all__ = ["NewTask", "Task", "TaskCategory", "TaskChanges", "TaskStatus"]
