"""Error Hierarchy — typed, categorized exceptions for all User Directory failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - to_response() produces the failure envelope: success=False, never `data`
    - Client errors (400/404) are recoverable; infrastructure errors (500) are critical
    - Raw failure detail appears only when expose_detail=True (development mode)

Design Decisions:
    - Single hierarchy with UserDirectoryError base: one FastAPI handler renders all
    - ErrorContext as dataclass: observability fields without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from user_directory.core.domain_types import FieldError


GENERIC_FAILURE_DETAIL = "Something went wrong"


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    CONFLICT = "conflict"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for log correlation."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    debug_info: dict[str, Any] | None = None


class UserDirectoryError(Exception):
    """Base exception for all User Directory errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self, expose_detail: bool = False) -> dict:
        """Convert to the failure envelope."""
        return {"success": False, "message": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class PayloadValidationError(UserDirectoryError):
    """One or more request fields failed validation."""
    def __init__(self, errors: list[FieldError], context: ErrorContext | None = None):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors = errors

    def to_response(self, expose_detail: bool = False) -> dict:
        response = super().to_response(expose_detail)
        response["errors"] = [e.to_dict() for e in self.errors]
        return response


class EmailConflictError(UserDirectoryError):
    """Email collides with the UNIQUE constraint of another user."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Email already exists", "EMAIL_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class UserNotFoundError(UserDirectoryError):
    """No user with the requested id."""
    def __init__(self, user_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.user_id = user_id
        super().__init__(
            "User not found", "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, ctx, 404,
        )
        self.user_id = user_id


class RouteNotFoundError(UserDirectoryError):
    """No route matches the method and path."""
    def __init__(self, method: str, path: str, context: ErrorContext | None = None):
        super().__init__(
            "Route not found", "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, context, 404,
        )
        self.method = method
        self.path = path


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(UserDirectoryError):
    """Storage operation failed for a reason other than a known constraint."""
    def __init__(self, message: str, detail: str, context: ErrorContext | None = None):
        super().__init__(
            message, "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail

    def to_response(self, expose_detail: bool = False) -> dict:
        response = super().to_response(expose_detail)
        response["error"] = self.detail if expose_detail else GENERIC_FAILURE_DETAIL
        return response


class InternalServerError(UserDirectoryError):
    """Wraps any unexpected fault reaching the catch-all handler."""
    def __init__(self, detail: str, context: ErrorContext | None = None):
        super().__init__(
            "Internal server error", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail

    def to_response(self, expose_detail: bool = False) -> dict:
        response = super().to_response(expose_detail)
        response["error"] = self.detail if expose_detail else GENERIC_FAILURE_DETAIL
        return response
