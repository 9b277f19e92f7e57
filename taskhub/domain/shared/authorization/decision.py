"""Decision: the outcome of an authorization request.

``Allow`` carries what the caller needs to apply the decision: a scope filter
for list queries and, for creation, the organization the new resource must be
placed in. ``Deny`` carries a reason code that maps onto the error taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, NoReturn

from taskhub.domain.shared.authorization.scope import ScopeFilter
from taskhub.domain.shared.error import (
    AuthorizationError,
    DomainError,
    InvalidHierarchyError,
    InvariantViolationError,
    NotFoundError,
    ScopeViolationError,
)
from taskhub.domain.shared.model.value import OrganizationId


class DenyReason(StrEnum):
    PERMISSION_DENIED = "permission_denied"
    SCOPE_VIOLATION = "scope_violation"
    NOT_FOUND = "not_found"
    INVALID_HIERARCHY = "invalid_hierarchy"
    INVARIANT_VIOLATION = "invariant_violation"


_ERRORS: dict[DenyReason, type[DomainError]] = {
    DenyReason.PERMISSION_DENIED: AuthorizationError,
    DenyReason.SCOPE_VIOLATION: ScopeViolationError,
    DenyReason.NOT_FOUND: NotFoundError,
    DenyReason.INVALID_HIERARCHY: InvalidHierarchyError,
    DenyReason.INVARIANT_VIOLATION: InvariantViolationError,
}


@dataclass(frozen=True)
class Allow:
    scope: ScopeFilter | None = None
    organization_id: OrganizationId | None = None

    allowed: Literal[True] = True

    def raise_for_deny(self) -> Allow:
        return self


@dataclass(frozen=True)
class Deny:
    reason: DenyReason
    message: str

    allowed: Literal[False] = False

    def to_error(self) -> DomainError:
        return _ERRORS[self.reason](self.message)

    def raise_for_deny(self) -> NoReturn:
        raise self.to_error()


Decision = Allow | Deny


def deny(reason: DenyReason, message: str) -> Deny:
    """Convenience constructor for a denial."""
    return Deny(reason=reason, message=message)
