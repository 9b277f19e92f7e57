"""Access decision engine.

Pure decision logic: given the actor, the action, a description of the
resource and a snapshot of the relevant tree/role state, produce a Decision.
No I/O happens here; the gateway gathers the snapshot.

Every decision is a permission/role gate followed by a scope or hierarchy
rule. A failing gate short-circuits before any scope rule runs.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from taskhub.domain.auth.model.actor import Actor, ActorTier
from taskhub.domain.auth.model.permission import PermissionType
from taskhub.domain.auth.model.role import Role, RoleType
from taskhub.domain.auth.service.hierarchy import can_assign_role, can_manage_user
from taskhub.domain.organization.model.organization import Organization
from taskhub.domain.organization.service.scope import allows_child_org, allows_root_org
from taskhub.domain.shared.authorization.action import Action
from taskhub.domain.shared.authorization.decision import Allow, Decision, Deny, DenyReason, deny
from taskhub.domain.shared.authorization.policy import (
    GrantedPermission,
    Policy,
    anyone,
    requires_permission,
    requires_role,
)
from taskhub.domain.shared.authorization.scope import (
    EMPTY_SCOPE,
    OrganizationSet,
    ScopeFilter,
    scope_of,
)
from taskhub.domain.shared.error import ConfigurationError
from taskhub.domain.shared.model.value import OrganizationId, RoleId
from taskhub.domain.shared.service import Service

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    """What the caller knows about the resource an action targets.

    For existing resources `organization_id` is the tenant the resource
    belongs to. For creation and list filters it is the organization the
    caller asked for (possibly None).

    `new_organization_id` and `new_role_id` describe the placement a user
    update asks for. `make_root` asks to detach an organization from its
    parent.
    """

    id: str | None = None
    organization_id: OrganizationId | None = None
    parent_id: OrganizationId | None = None
    role_id: RoleId | None = None
    new_organization_id: OrganizationId | None = None
    new_role_id: RoleId | None = None
    make_root: bool = False


@dataclass(frozen=True)
class AccessContext:
    """Snapshot of the state a decision depends on, gathered by the gateway."""

    scope: ScopeFilter = EMPTY_SCOPE
    organization: Organization | None = None
    parent: Organization | None = None
    role: Role | None = None
    role_organization: Organization | None = None
    new_organization: Organization | None = None
    new_role: Role | None = None
    new_role_organization: Organization | None = None
    child_count: int = 0
    member_count: int = 0
    task_count: int = 0


@dataclass(frozen=True)
class AccessRule:
    """Gate for one action: the policy an actor must satisfy and the denial message."""

    policy: Policy
    message: str


def rule(policy: Policy, message: str) -> AccessRule:
    return AccessRule(policy=policy, message=message)


_OWNER_OR_ADMIN = requires_role(RoleType.OWNER, RoleType.ADMIN)

GATES: dict[Action, AccessRule] = {
    Action.TASK_CREATE: rule(
        requires_permission(PermissionType.CREATE_TASK),
        "Insufficient permissions to create tasks",
    ),
    Action.TASK_LIST: rule(
        requires_permission(PermissionType.READ_TASK),
        "Insufficient permissions to read tasks",
    ),
    Action.TASK_READ: rule(
        requires_permission(PermissionType.READ_TASK),
        "Insufficient permissions to read tasks",
    ),
    Action.TASK_UPDATE: rule(
        requires_permission(PermissionType.UPDATE_TASK) & ~requires_role(RoleType.VIEWER),
        "Insufficient permissions to update tasks",
    ),
    Action.TASK_DELETE: rule(
        requires_permission(PermissionType.DELETE_TASK) & ~requires_role(RoleType.VIEWER),
        "Insufficient permissions to delete tasks",
    ),
    Action.USER_CREATE: rule(_OWNER_OR_ADMIN, "Only owners and admins can create users"),
    Action.USER_LIST: rule(_OWNER_OR_ADMIN, "Only owners and admins can list users"),
    Action.USER_READ: rule(_OWNER_OR_ADMIN, "Only owners and admins can view users"),
    Action.USER_UPDATE: rule(_OWNER_OR_ADMIN, "Only owners and admins can update users"),
    Action.USER_DELETE: rule(_OWNER_OR_ADMIN, "Only owners and admins can delete users"),
    Action.ROLE_LIST: rule(_OWNER_OR_ADMIN, "Only owners and admins can list roles"),
    Action.ORGANIZATION_LIST: rule(anyone(), "Access denied"),
    Action.ORGANIZATION_READ: rule(anyone(), "Access denied"),
    Action.ORGANIZATION_CREATE: rule(
        requires_role(RoleType.OWNER), "Only owners can create organizations"
    ),
    Action.ORGANIZATION_UPDATE: rule(
        requires_role(RoleType.OWNER), "Only owners can update organizations"
    ),
    Action.ORGANIZATION_DELETE: rule(
        requires_role(RoleType.OWNER), "Only owners can delete organizations"
    ),
    Action.AUDIT_LOG_READ: rule(
        _OWNER_OR_ADMIN & GrantedPermission(PermissionType.READ_AUDIT_LOG),
        "Insufficient permissions to read audit logs",
    ),
}


def validate_coverage(gates: dict[Action, AccessRule] = GATES) -> None:
    """Startup check: every Action member must have a gate."""
    missing = set(Action) - set(gates)
    if missing:
        raise ConfigurationError(f"Actions without access rules: {sorted(missing)}")


_Rule = Callable[[Actor, Resource, AccessContext], Decision]


class AccessDecisionEngine(Service):
    """Composes the role hierarchy and the tree scope into allow/deny decisions.

    `harden_user_mutations` extends user update/delete from the role gate
    alone to the scope and management-hierarchy rules used on creation.
    """

    harden_user_mutations: bool = False

    def gate(self, actor: Actor, action: Action) -> Deny | None:
        """Run the coarse role/permission gate. Returns a denial or None."""
        access_rule = GATES.get(action)
        if access_rule is None:
            raise ConfigurationError(f"No access rule for action {action}")
        if not access_rule.policy.evaluate(actor):
            return deny(DenyReason.PERMISSION_DENIED, access_rule.message)
        return None

    def decide(
        self,
        actor: Actor,
        action: Action,
        resource: Resource | None = None,
        context: AccessContext | None = None,
    ) -> Decision:
        denied = self.gate(actor, action)
        if denied is not None:
            return denied
        rules: dict[Action, _Rule] = {
            Action.TASK_CREATE: self._task_create,
            Action.TASK_LIST: self._task_list,
            Action.TASK_READ: self._in_scope,
            Action.TASK_UPDATE: self._in_scope,
            Action.TASK_DELETE: self._in_scope,
            Action.USER_CREATE: self._user_create,
            Action.USER_LIST: self._user_list,
            Action.USER_READ: self._in_scope,
            Action.USER_UPDATE: self._user_update,
            Action.USER_DELETE: self._user_delete,
            Action.ROLE_LIST: self._scope_only,
            Action.ORGANIZATION_LIST: self._organization_list,
            Action.ORGANIZATION_READ: self._in_scope,
            Action.ORGANIZATION_CREATE: self._organization_create,
            Action.ORGANIZATION_UPDATE: self._organization_update,
            Action.ORGANIZATION_DELETE: self._organization_delete,
            Action.AUDIT_LOG_READ: self._audit_log_read,
        }
        return rules[action](actor, resource or Resource(), context or AccessContext())

    # --- shared rules ---

    def _scope_only(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        return Allow(scope=ctx.scope)

    def _in_scope(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        if not ctx.scope.contains(resource.organization_id):
            return deny(
                DenyReason.SCOPE_VIOLATION,
                f"Organization {resource.organization_id} is outside your organization scope",
            )
        return Allow(scope=ctx.scope, organization_id=resource.organization_id)

    # --- tasks ---

    def _task_create(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        requested = resource.organization_id
        tier = actor.tier

        if tier == ActorTier.SUPER_ADMIN:
            if requested is None:
                return deny(
                    DenyReason.INVARIANT_VIOLATION,
                    "Organization ID is required for task creation",
                )
            if ctx.organization is None:
                return deny(DenyReason.NOT_FOUND, f"Organization not found: {requested}")
            target = requested
        elif tier == ActorTier.ROOT_OWNER:
            target = requested or actor.organization_id
            if not ctx.scope.contains(target):
                return deny(
                    DenyReason.SCOPE_VIOLATION,
                    "Can only create tasks in your main organization or its sub-organizations",
                )
        elif tier == ActorTier.MEMBER and actor.role_type == RoleType.ADMIN:
            target = actor.organization_id
        else:
            return deny(
                DenyReason.PERMISSION_DENIED,
                "Invalid user role or organization level for task creation",
            )

        assert target is not None
        return Allow(scope=scope_of([target]), organization_id=target)

    def _task_list(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        requested = resource.organization_id
        if requested is None:
            return Allow(scope=ctx.scope)

        tier = actor.tier
        if tier == ActorTier.SUPER_ADMIN:
            return Allow(scope=ctx.scope.narrow(requested), organization_id=requested)
        if tier == ActorTier.ROOT_OWNER:
            if not ctx.scope.contains(requested):
                return deny(
                    DenyReason.SCOPE_VIOLATION,
                    f"Organization {requested} is outside your organization scope",
                )
            return Allow(scope=ctx.scope.narrow(requested), organization_id=requested)
        return deny(
            DenyReason.PERMISSION_DENIED,
            "Only the Super Admin and main organization owners can filter tasks by organization",
        )

    # --- users ---

    def _user_create(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        target = resource.organization_id
        if target is None:
            return deny(
                DenyReason.INVARIANT_VIOLATION, "Organization ID is required for a new user"
            )
        if not ctx.scope.contains(target):
            return deny(
                DenyReason.SCOPE_VIOLATION,
                "Can only create users in organizations within your scope",
            )
        if ctx.organization is None:
            return deny(DenyReason.NOT_FOUND, f"Organization not found: {target}")
        if resource.role_id is None:
            return deny(DenyReason.INVARIANT_VIOLATION, "Role ID is required for a new user")
        if ctx.role is None:
            return deny(DenyReason.NOT_FOUND, f"Role not found: {resource.role_id}")

        denied = _assignment_denied(actor, ctx.scope, ctx.role, ctx.role_organization)
        if denied is not None:
            return denied
        return Allow(scope=ctx.scope, organization_id=target)

    def _user_list(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        if resource.organization_id is None:
            return Allow(scope=ctx.scope)
        if not ctx.scope.contains(resource.organization_id):
            return deny(
                DenyReason.SCOPE_VIOLATION,
                f"Organization {resource.organization_id} is outside your organization scope",
            )
        return Allow(
            scope=ctx.scope.narrow(resource.organization_id),
            organization_id=resource.organization_id,
        )

    def _user_mutation(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        if not self.harden_user_mutations:
            return Allow(organization_id=resource.organization_id)

        if not ctx.scope.contains(resource.organization_id):
            return deny(
                DenyReason.SCOPE_VIOLATION,
                "Can only manage users in organizations within your scope",
            )
        target_level = ctx.organization.level if ctx.organization is not None else None
        target_role_type = ctx.role.type if ctx.role is not None else None
        if not can_manage_user(
            actor, ctx.scope, target_role_type, resource.organization_id, target_level
        ):
            return deny(DenyReason.PERMISSION_DENIED, "You cannot manage this user")
        return Allow(scope=ctx.scope, organization_id=resource.organization_id)

    def _user_update(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        decision = self._user_mutation(actor, resource, ctx)
        if isinstance(decision, Deny) or not self.harden_user_mutations:
            return decision

        moved_to = resource.new_organization_id
        if moved_to is not None:
            if not ctx.scope.contains(moved_to):
                return deny(
                    DenyReason.SCOPE_VIOLATION,
                    "Can only move users to organizations within your scope",
                )
            if ctx.new_organization is None:
                return deny(DenyReason.NOT_FOUND, f"Organization not found: {moved_to}")
        if resource.new_role_id is not None:
            if ctx.new_role is None:
                return deny(DenyReason.NOT_FOUND, f"Role not found: {resource.new_role_id}")
            denied = _assignment_denied(
                actor, ctx.scope, ctx.new_role, ctx.new_role_organization
            )
            if denied is not None:
                return denied
        return decision

    def _user_delete(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        decision = self._user_mutation(actor, resource, ctx)
        if isinstance(decision, Deny):
            return decision
        if ctx.task_count > 0:
            return deny(
                DenyReason.INVARIANT_VIOLATION,
                "Cannot delete user who has created or been assigned tasks",
            )
        return decision

    # --- organizations ---

    def _organization_list(
        self, actor: Actor, resource: Resource, ctx: AccessContext
    ) -> Decision:
        tier = actor.tier
        if tier in (ActorTier.SUPER_ADMIN, ActorTier.ROOT_OWNER):
            return Allow(scope=ctx.scope)
        if tier == ActorTier.MEMBER and actor.organization_level == 1:
            return Allow(scope=ctx.scope)
        return Allow(scope=EMPTY_SCOPE)

    def _organization_create(
        self, actor: Actor, resource: Resource, ctx: AccessContext
    ) -> Decision:
        if resource.parent_id is None:
            if not allows_root_org(actor):
                return deny(
                    DenyReason.PERMISSION_DENIED,
                    "Only the Super Admin can create main organizations",
                )
            return Allow()

        if actor.is_root_owner and resource.parent_id != actor.organization_id:
            return deny(
                DenyReason.INVALID_HIERARCHY,
                "Can only create sub-organizations under your main organization",
            )
        if not (actor.is_super_admin or actor.is_root_owner):
            return deny(
                DenyReason.PERMISSION_DENIED,
                "Only the Super Admin or main organization owners can create sub-organizations",
            )
        if ctx.parent is None:
            return deny(DenyReason.NOT_FOUND, f"Organization not found: {resource.parent_id}")
        if not ctx.parent.is_active or not allows_child_org(actor, ctx.parent):
            return deny(
                DenyReason.INVALID_HIERARCHY,
                "Sub-organizations can only be created under active main organizations (level 0)",
            )
        return Allow(organization_id=resource.parent_id)

    def _organization_update(
        self, actor: Actor, resource: Resource, ctx: AccessContext
    ) -> Decision:
        if resource.make_root:
            if not allows_root_org(actor):
                return deny(
                    DenyReason.PERMISSION_DENIED,
                    "Only the Super Admin can turn an organization into a main organization",
                )
            return Allow(organization_id=resource.organization_id)
        if resource.parent_id is None:
            return Allow(organization_id=resource.organization_id)

        if ctx.parent is None:
            return deny(DenyReason.NOT_FOUND, f"Organization not found: {resource.parent_id}")
        if resource.parent_id == resource.organization_id:
            return deny(DenyReason.INVALID_HIERARCHY, "An organization cannot be its own parent")
        if not ctx.parent.is_root or not ctx.parent.is_active:
            return deny(
                DenyReason.INVALID_HIERARCHY,
                "Sub-organizations can only be placed under active main organizations (level 0)",
            )
        if ctx.child_count > 0:
            return deny(
                DenyReason.INVALID_HIERARCHY,
                "An organization with sub-organizations cannot become a sub-organization",
            )
        return Allow(organization_id=resource.organization_id)

    def _organization_delete(
        self, actor: Actor, resource: Resource, ctx: AccessContext
    ) -> Decision:
        if ctx.child_count > 0:
            return deny(
                DenyReason.INVARIANT_VIOLATION,
                "Cannot delete organization with child organizations",
            )
        if ctx.member_count > 0:
            return deny(DenyReason.INVARIANT_VIOLATION, "Cannot delete organization with users")
        return Allow(organization_id=resource.organization_id)

    # --- audit ---

    def _audit_log_read(self, actor: Actor, resource: Resource, ctx: AccessContext) -> Decision:
        if actor.organization_id is None:
            return Allow(scope=EMPTY_SCOPE)
        return Allow(scope=OrganizationSet(frozenset({actor.organization_id})))


def _assignment_denied(
    actor: Actor,
    scope: ScopeFilter,
    role: Role,
    role_organization: Organization | None,
) -> Deny | None:
    """Deny giving `role` to a user unless the role hierarchy allows it."""
    role_level = role_organization.level if role_organization is not None else 0
    if can_assign_role(actor, scope, role, role_level):
        return None

    if actor.is_root_owner:
        if role.type == RoleType.OWNER and role_level == 0:
            message = "Main organization owners cannot create other main organization owners"
        else:
            message = (
                "Main organization owners can only assign admin and viewer roles "
                "of their sub-organizations"
            )
    else:
        message = "Admins can only assign roles from their own organization"
    return deny(DenyReason.INVARIANT_VIOLATION, message)
