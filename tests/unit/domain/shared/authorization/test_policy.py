"""Tests for composable authorization policies."""

from taskhub.domain.auth.model.actor import Actor
from taskhub.domain.auth.model.catalog import default_permissions
from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.auth.model.role import RoleType
from taskhub.domain.shared.authorization.policy import (
    AllOf,
    CatalogPermission,
    GrantedPermission,
    anyone,
    requires_permission,
    requires_role,
)
from taskhub.domain.shared.model.value import OrganizationId, UserId


def _make_actor(
    role_type: RoleType | None,
    permissions: frozenset[PermissionType] | None = None,
) -> Actor:
    return Actor(
        user_id=UserId("actor"),
        role_type=role_type,
        organization_id=OrganizationId("s1"),
        organization_level=1,
        permissions=(
            permissions
            if permissions is not None
            else default_permissions(role_type) if role_type else frozenset()
        ),
    )


class TestRequiresRole:
    def test_exact_match_only(self) -> None:
        policy = requires_role(RoleType.ADMIN)

        assert policy.evaluate(_make_actor(RoleType.ADMIN)) is True
        # No rank inheritance: an owner is not an admin here
        assert policy.evaluate(_make_actor(RoleType.OWNER)) is False

    def test_any_of_several_roles(self) -> None:
        policy = requires_role(RoleType.OWNER, RoleType.ADMIN)

        assert policy.evaluate(_make_actor(RoleType.OWNER)) is True
        assert policy.evaluate(_make_actor(RoleType.VIEWER)) is False

    def test_actor_without_role_fails(self) -> None:
        assert requires_role(RoleType.VIEWER).evaluate(_make_actor(None)) is False


class TestPermissionPolicies:
    def test_requires_permission_needs_catalog_and_stored_set(self) -> None:
        policy = requires_permission(PermissionType.CREATE_TASK)

        assert isinstance(policy, AllOf)
        assert policy.evaluate(_make_actor(RoleType.ADMIN)) is True
        assert policy.evaluate(_make_actor(RoleType.VIEWER)) is False

    def test_stored_set_narrower_than_catalog_denies(self) -> None:
        narrowed = _make_actor(RoleType.ADMIN, frozenset({PermissionType.READ_TASK}))

        assert CatalogPermission(PermissionType.CREATE_TASK).evaluate(narrowed) is True
        assert GrantedPermission(PermissionType.CREATE_TASK).evaluate(narrowed) is False
        assert requires_permission(PermissionType.CREATE_TASK).evaluate(narrowed) is False

    def test_stored_set_wider_than_catalog_still_denies(self) -> None:
        widened = _make_actor(RoleType.VIEWER, frozenset(PermissionType))

        assert requires_permission(PermissionType.UPDATE_TASK).evaluate(widened) is False


class TestComposition:
    def test_or_operator(self) -> None:
        policy = requires_role(RoleType.OWNER) | requires_role(RoleType.VIEWER)

        assert policy.evaluate(_make_actor(RoleType.VIEWER)) is True
        assert policy.evaluate(_make_actor(RoleType.ADMIN)) is False

    def test_not_operator(self) -> None:
        policy = ~requires_role(RoleType.VIEWER)

        assert policy.evaluate(_make_actor(RoleType.VIEWER)) is False
        assert policy.evaluate(_make_actor(RoleType.ADMIN)) is True

    def test_anyone(self) -> None:
        assert anyone().evaluate(_make_actor(None)) is True
