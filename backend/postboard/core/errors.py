"""Error Hierarchy: typed, categorized exceptions for every Postboard failure mode.

Invariants:
    - Every error has an error_code (str), a category and a single http_status
    - Client errors (4xx) carry user-facing messages; 5xx messages never leak internals
    - to_response() produces the envelope shared by REST and GraphQL: {message, status, data?}

Design Decisions:
    - Single hierarchy with PostboardError base: both boundary adapters map it the same way
    - data is optional and only set by ValidationError (list of {"message": ...} records)
"""

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """High-level error categories for routing and logging."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class PostboardError(Exception):
    """Base exception for all Postboard errors."""

    def __init__(
        self,
        message: str,
        error_code: str,
        category: ErrorCategory,
        http_status: int = 500,
        data: list[dict[str, Any]] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.category = category
        self.http_status = http_status
        self.data = data

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500

    def to_response(self) -> dict:
        """Convert to the standard error envelope."""
        body: dict[str, Any] = {
            "message": self.message,
            "status": self.http_status,
        }
        if self.data is not None:
            body["data"] = self.data
        return body


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(PostboardError):
    """One or more input fields failed validation."""
    def __init__(
        self, violations: list[dict[str, Any]], message: str = "Invalid input!",
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            422, data=list(violations),
        )


class AuthError(PostboardError):
    """Missing, invalid or expired session, or wrong credentials."""
    def __init__(self, message: str = "Not authenticated!"):
        super().__init__(
            message, "NOT_AUTHENTICATED", ErrorCategory.AUTHENTICATION, 401,
        )


class ForbiddenError(PostboardError):
    """Authenticated caller does not own the resource."""
    def __init__(self, message: str = "Not authorized!"):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION, 403,
        )


class NotFoundError(PostboardError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: object = None):
        if resource_id is None:
            message = f"{resource_type} not found"
        else:
            message = f"{resource_type} '{resource_id}' not found"
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ConflictError(PostboardError):
    """A unique field is already taken."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT, 409,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalError(PostboardError):
    """Catch-all for failures that carry no classified code."""
    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        category: ErrorCategory = ErrorCategory.INTERNAL,
    ):
        super().__init__(message, error_code, category, 500)


class DatabaseError(InternalError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
        )
        self.operation = operation
