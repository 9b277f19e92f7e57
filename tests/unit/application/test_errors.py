"""Tests for mapping taskhub errors onto HTTP responses."""

import pytest

from taskhub.application.errors import map_taskhub_error
from taskhub.domain.shared.authorization.decision import DenyReason, deny
from taskhub.domain.shared.error import (
    AuthorizationError,
    ConfigurationError,
    DomainError,
    InvalidHierarchyError,
    InvariantViolationError,
    NotFoundError,
    ScopeViolationError,
    ValidationError,
)


class TestMapTaskhubError:
    @pytest.mark.parametrize(
        ("error", "status_code"),
        [
            (NotFoundError("Task not found: t-1"), 404),
            (ValidationError("bad"), 422),
            (InvariantViolationError("Cannot delete organization with users"), 422),
            (InvalidHierarchyError("An organization cannot be its own parent"), 422),
            (AuthorizationError("Only owners can delete organizations"), 403),
            (ScopeViolationError("outside scope"), 403),
            (DomainError("something else"), 400),
            (ConfigurationError("no rule for task:create"), 500),
        ],
    )
    def test_status_codes(self, error, status_code: int) -> None:
        assert map_taskhub_error(error).status_code == status_code

    def test_detail_carries_code_and_message(self) -> None:
        exc = map_taskhub_error(ScopeViolationError("outside scope"))

        assert exc.detail == {"code": "scope_violation", "message": "outside scope"}

    def test_field_is_reported(self) -> None:
        exc = map_taskhub_error(
            InvariantViolationError("User with this email already exists", field="email")
        )

        assert exc.detail["field"] == "email"

    def test_deny_reasons_map_to_distinct_statuses(self) -> None:
        statuses = {
            reason: map_taskhub_error(deny(reason, "x").to_error()).status_code
            for reason in DenyReason
        }

        assert statuses == {
            DenyReason.PERMISSION_DENIED: 403,
            DenyReason.SCOPE_VIOLATION: 403,
            DenyReason.NOT_FOUND: 404,
            DenyReason.INVALID_HIERARCHY: 422,
            DenyReason.INVARIANT_VIOLATION: 422,
        }
