"""Composable policy types for the coarse authorization gate.

Policies look only at the actor (no resource loaded yet). They run before any
scope lookup, so a failing policy short-circuits the whole decision.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from taskhub.domain.auth.model.actor import Actor, holds_permission
from taskhub.domain.auth.model.catalog import has_permission
from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.auth.model.role import RoleType


class Policy(ABC):
    """Base class for composable authorization policies."""

    @abstractmethod
    def evaluate(self, actor: Actor) -> bool:
        """Return True if actor satisfies this policy."""
        ...

    def __and__(self, other: Policy) -> AllOf:
        return AllOf(policies=(self, other))

    def __or__(self, other: Policy) -> AnyOf:
        return AnyOf(policies=(self, other))

    def __invert__(self) -> Not:
        return Not(policy=self)


@dataclass(frozen=True)
class Anyone(Policy):
    """Every authenticated actor passes; the decision is left to scoping."""

    def evaluate(self, actor: Actor) -> bool:
        return True


@dataclass(frozen=True)
class RequiresRole(Policy):
    """Actor's role type is one of the given types.

    Role types are never ranked against each other here: ranks only compare
    actors of the same organization.
    """

    role_types: tuple[RoleType, ...]

    def evaluate(self, actor: Actor) -> bool:
        return actor.has_role(*self.role_types)


@dataclass(frozen=True)
class CatalogPermission(Policy):
    """Coarse check: the actor's role *type* grants the permission per the catalog."""

    permission: PermissionType

    def evaluate(self, actor: Actor) -> bool:
        return actor.role_type is not None and has_permission(actor.role_type, self.permission)


@dataclass(frozen=True)
class GrantedPermission(Policy):
    """Fine check: the permission is in the actor's resolved permission set."""

    permission: PermissionType

    def evaluate(self, actor: Actor) -> bool:
        return holds_permission(actor, self.permission)


@dataclass(frozen=True)
class AllOf(Policy):
    """Policy that requires ALL sub-policies to pass."""

    policies: tuple[Policy, ...]

    def evaluate(self, actor: Actor) -> bool:
        return all(p.evaluate(actor) for p in self.policies)


@dataclass(frozen=True)
class AnyOf(Policy):
    """Policy that requires at least ONE sub-policy to pass."""

    policies: tuple[Policy, ...]

    def evaluate(self, actor: Actor) -> bool:
        return any(p.evaluate(actor) for p in self.policies)


@dataclass(frozen=True)
class Not(Policy):
    """Policy that inverts another policy."""

    policy: Policy

    def evaluate(self, actor: Actor) -> bool:
        return not self.policy.evaluate(actor)


def anyone() -> Anyone:
    return Anyone()


def requires_role(*role_types: RoleType) -> RequiresRole:
    """Factory: policy requiring one of the given role types."""
    return RequiresRole(role_types=role_types)


def requires_permission(permission: PermissionType) -> AllOf:
    """Factory: the catalog AND the actor's stored set must both grant the permission."""
    return CatalogPermission(permission=permission) & GrantedPermission(permission=permission)
