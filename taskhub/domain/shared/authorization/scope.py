"""ScopeFilter: the slice of the organization tree an actor may read or write.

A scope is either every organization or an explicit (possibly empty) set of
organization ids. List queries consume it directly; single-resource checks
test membership.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from taskhub.domain.shared.model.value import OrganizationId


class ScopeKind(StrEnum):
    ALL = "all"
    SET = "set"


class ScopeFilter(ABC):
    kind: ClassVar[ScopeKind]

    @abstractmethod
    def contains(self, organization_id: OrganizationId | None) -> bool:
        """Return True if the organization lies inside this scope."""
        ...

    @abstractmethod
    def narrow(self, organization_id: OrganizationId) -> OrganizationSet:
        """Restrict the scope to a single organization (empty if outside)."""
        ...

    @property
    def is_empty(self) -> bool:
        return False


@dataclass(frozen=True)
class AllOrganizations(ScopeFilter):
    """Unrestricted scope (Super Admin)."""

    kind: ClassVar[ScopeKind] = ScopeKind.ALL

    def contains(self, organization_id: OrganizationId | None) -> bool:
        return True

    def narrow(self, organization_id: OrganizationId) -> OrganizationSet:
        return OrganizationSet(frozenset({organization_id}))


@dataclass(frozen=True)
class OrganizationSet(ScopeFilter):
    """Scope limited to an explicit set of organization ids."""

    kind: ClassVar[ScopeKind] = ScopeKind.SET

    org_ids: frozenset[OrganizationId] = field(default_factory=frozenset)

    def contains(self, organization_id: OrganizationId | None) -> bool:
        return organization_id is not None and organization_id in self.org_ids

    def narrow(self, organization_id: OrganizationId) -> OrganizationSet:
        if organization_id in self.org_ids:
            return OrganizationSet(frozenset({organization_id}))
        return EMPTY_SCOPE

    @property
    def is_empty(self) -> bool:
        return not self.org_ids


ALL_ORGANIZATIONS = AllOrganizations()
EMPTY_SCOPE = OrganizationSet()


def scope_of(organization_ids: Iterable[OrganizationId | None]) -> OrganizationSet:
    """Build a set scope, dropping missing ids."""
    return OrganizationSet(frozenset(i for i in organization_ids if i is not None))
