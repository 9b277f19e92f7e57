"""Audit ports."""

from .repository import AuditLogRepository

__all__ = ["AuditLogRepository"]
