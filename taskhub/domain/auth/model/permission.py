"""Permission kinds understood by the authorization core."""

from enum import StrEnum


class PermissionType(StrEnum):
    CREATE_TASK = "create_task"
    READ_TASK = "read_task"
    UPDATE_TASK = "update_task"
    DELETE_TASK = "delete_task"
    READ_AUDIT_LOG = "read_audit_log"
    MANAGE_USERS = "manage_users"
    MANAGE_ROLES = "manage_roles"
    MANAGE_ORGANIZATIONS = "manage_organizations"
