"""Centralized error transformation for an HTTP front end.

Maps taskhub errors to HTTPException responses.
"""

from typing import Any

from fastapi import HTTPException

from taskhub.domain.shared.error import (
    AuthorizationError,
    DomainError,
    InvalidHierarchyError,
    InvariantViolationError,
    NotFoundError,
    ScopeViolationError,
    TaskhubError,
    ValidationError,
)

DOMAIN_ERROR_STATUS_MAP: dict[type[DomainError], int] = {
    NotFoundError: 404,
    ValidationError: 422,
    InvariantViolationError: 422,
    InvalidHierarchyError: 422,
    AuthorizationError: 403,
    ScopeViolationError: 403,
}


def map_taskhub_error(error: TaskhubError) -> HTTPException:
    """Map a taskhub error to an HTTPException.

    Args:
        error: The taskhub error to map.

    Returns:
        HTTPException with appropriate status code and detail.
    """
    detail: dict[str, Any] = {
        "code": error.code,
        "message": error.message,
    }

    if isinstance(error, DomainError):
        status_code = DOMAIN_ERROR_STATUS_MAP.get(type(error), 400)
        if isinstance(error, ValidationError) and error.field is not None:
            detail["field"] = error.field
        return HTTPException(status_code=status_code, detail=detail)

    # Wiring problems and unknown TaskhubError subclasses
    return HTTPException(status_code=500, detail=detail)
