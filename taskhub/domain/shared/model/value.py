"""Identifier types shared by every taskhub domain."""

from typing import NewType
from uuid import uuid4

OrganizationId = NewType("OrganizationId", str)
UserId = NewType("UserId", str)
RoleId = NewType("RoleId", str)
TaskId = NewType("TaskId", str)


def new_id() -> str:
    """Generate an opaque identifier for a new row."""
    return str(uuid4())
