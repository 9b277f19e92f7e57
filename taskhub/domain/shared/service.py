"""Base class for domain services."""

from dataclasses import dataclass
from typing import dataclass_transform


@dataclass_transform(kw_only_default=True)
class _ServiceMeta(type):
    """Metaclass that applies @dataclass(kw_only=True) to subclasses."""

    def __new__(mcs, name: str, bases: tuple, namespace: dict):
        cls = super().__new__(mcs, name, bases, namespace)
        if any(isinstance(b, mcs) for b in bases):
            return dataclass(kw_only=True)(cls)
        return cls


class Service(metaclass=_ServiceMeta):
    """Base class for domain services.

    Subclasses are keyword-only dataclasses; their annotated fields are the
    collaborators injected by the DI container:

        class TaskService(Service):
            task_repo: TaskRepository
            gateway: AuthorizationGateway
    """
