"""Error Hierarchy — typed, categorized exceptions for all API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; InternalFailure is critical
    - to_response() produces {"error": str}, or {"errors": [...]} for validation
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ApiError base: FastAPI global handler catches all (ADR: uniform error shape)
    - InvalidToken kept apart from Unauthenticated: a forged or expired token answers 403,
      a missing token or unknown user answers 401
"""

from dataclasses import dataclass
from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FieldError:
    """One violated field rule. field is None for body-level problems."""
    message: str
    field: str | None = None

    def to_dict(self) -> dict:
        if self.field is None:
            return {"message": self.message}
        return {"field": self.field, "message": self.message}


class ApiError(Exception):
    """Base exception for all API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationFailed(ApiError):
    """One or more field rules failed. Carries every failure, not just the first."""
    def __init__(self, errors: list[FieldError]):
        super().__init__(
            "Invalid request data", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.errors = list(errors)

    def to_response(self) -> dict:
        return {"errors": [e.to_dict() for e in self.errors]}


class Unauthenticated(ApiError):
    """No usable credentials, unknown user, or wrong password."""
    def __init__(self, message: str = "authentication required"):
        super().__init__(
            message, "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class InvalidToken(ApiError):
    """Bearer token failed signature, expiry, or payload checks."""
    def __init__(self, message: str = "invalid token"):
        super().__init__(
            message, "INVALID_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 403,
        )


class Forbidden(ApiError):
    """Authenticated, but the role is not allowed here."""
    def __init__(self, message: str = "access denied: insufficient permissions"):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, 403,
        )


class NotFound(ApiError):
    """Requested resource does not exist."""
    def __init__(self, message: str):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, 404,
        )


class Conflict(ApiError):
    """Write would violate a uniqueness rule."""
    def __init__(self, message: str, http_status: int = 409):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, http_status,
        )


# ─── Server Errors (500-level) ──────────────────────────────────

class InternalFailure(ApiError):
    """Unexpected persistence or runtime failure. Message is always generic."""
    def __init__(self, operation: str = "unknown"):
        super().__init__(
            "internal server error", "INTERNAL_ERROR",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
