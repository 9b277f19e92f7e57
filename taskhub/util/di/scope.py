"""Custom Dishka scopes for taskhub."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Taskhub dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, shared store)
    - UOW: Unit of Work (one request: services, gateway, repositories)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
