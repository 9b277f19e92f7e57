from .provider import AuthzProvider

__all__ = ["AuthzProvider"]
