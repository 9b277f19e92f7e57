"""Error taxonomy for the taskhub domain.

Every failure path of the authorization core surfaces as one of these types.
Each carries a stable ``code`` so the API layer can map it to a response
without inspecting messages.
"""


class TaskhubError(Exception):
    """Root of all taskhub errors."""

    default_code = "error"

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r})"


class DomainError(TaskhubError):
    """A request-local failure caused by the caller or by current domain state."""


class NotFoundError(DomainError):
    """Referenced organization, role, user or task does not exist."""

    default_code = "not_found"


class ValidationError(DomainError):
    """Request data is invalid."""

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        field: str | None = None,
    ) -> None:
        super().__init__(message, code=code)
        self.field = field


class InvariantViolationError(ValidationError):
    """The operation would break a domain invariant.

    Examples: deleting a non-empty organization, assigning a role from a
    foreign organization, creating a duplicate-email user.
    """

    default_code = "invariant_violation"


class InvalidHierarchyError(InvariantViolationError):
    """The operation would produce an organization tree the model forbids."""

    default_code = "invalid_hierarchy"


class AuthorizationError(DomainError):
    """The actor lacks the permission or role the operation requires."""

    default_code = "permission_denied"


class ScopeViolationError(AuthorizationError):
    """The actor holds the permission, but the target lies outside their scope."""

    default_code = "scope_violation"


class ConfigurationError(TaskhubError):
    """The application is wired incorrectly."""

    default_code = "configuration_error"
