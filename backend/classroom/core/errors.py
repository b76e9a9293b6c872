"""Error Hierarchy — typed, categorized exceptions for all Classroom failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; backend faults (500-level) are critical
    - to_response() produces the REST envelope used by every error handler
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ClassroomError base: FastAPI global handler catches all
    - ErrorContext as dataclass: request-scoped identifiers without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


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
    BACKEND = "backend"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers attached to an error for observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    course_id: str | None = None
    comment_id: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None


class ClassroomError(Exception):
    """Base exception for all Classroom errors."""

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

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "course_id": self.context.course_id,
                    "comment_id": self.context.comment_id,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(ClassroomError):
    """Input rejected before any mutation (empty content, short password...)."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AuthenticationError(ClassroomError):
    """Missing, malformed or expired credentials."""
    def __init__(self, message: str = "Not authenticated", context: ErrorContext | None = None):
        super().__init__(
            message, "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class PermissionDeniedError(ClassroomError):
    """Authenticated user lacks the role or ownership required."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PERMISSION_DENIED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 403,
        )


class ResourceNotFoundError(ClassroomError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateResourceError(ClassroomError):
    """Unique field already taken (e.g. user email)."""
    def __init__(self, resource_type: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} with this {field} already exists",
            "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 409,
        )
        self.field = field


class ConcurrencyError(ClassroomError):
    """Concurrent modification detected (stale document version)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONCURRENCY_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class BackendFaultError(ClassroomError):
    """Storage backend unreachable or rejected the operation."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Storage {operation} failed: {message}",
            "BACKEND_FAULT", ErrorCategory.BACKEND,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        """Same envelope, but the driver-level message stays in the logs."""
        response = super().to_response()
        response["error"]["message"] = "Storage backend unavailable"
        return response
