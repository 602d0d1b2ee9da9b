"""Error Hierarchy — typed, categorized exceptions for all LessonMap failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope used by the global handlers
    - No internal details leaked in user-facing messages (store/driver text is logged only)

Design Decisions:
    - Single hierarchy with LessonMapError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Coarse CreateFailed/DeleteFailed over granular store errors: callers retry the whole
      operation, they never act on which statement failed
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    lesson_id: str | None = None
    user_id: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class LessonMapError(Exception):
    """Base exception for all LessonMap errors."""

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
                    "lesson_id": self.context.lesson_id,
                    "user_id": self.context.user_id,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationFailedError(LessonMapError):
    """Request input rejected before reaching the core."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )
        self.field = field


class AuthenticationError(LessonMapError):
    """Bearer token missing, malformed or not verifiable."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Authentication failed!",
            "AUTHENTICATION_FAILED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 403,
        )


class UnauthorizedError(LessonMapError):
    """Requester is not the creator of the lesson."""
    def __init__(self, action: str, context: ErrorContext | None = None):
        super().__init__(
            f"You are not allowed to {action} this lesson.",
            "NOT_ALLOWED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, context, 401,
        )
        self.action = action


class ResourceNotFoundError(LessonMapError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class GeocodeError(LessonMapError):
    """Address could not be resolved to coordinates.

    reason "no_match" is the caller's fault (422); anything else is the
    provider's (503).
    """
    def __init__(
        self, message: str, reason: str, context: ErrorContext | None = None,
    ):
        no_match = reason == "no_match"
        super().__init__(
            message, "GEOCODE_FAILED",
            ErrorCategory.VALIDATION if no_match else ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR if no_match else ErrorSeverity.CRITICAL,
            context, 422 if no_match else 503,
        )
        self.reason = reason


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(LessonMapError):
    """Entity store operation failed. Opaque: names the operation, never the cause."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Something went wrong, please try again later.",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class CreateFailedError(LessonMapError):
    """Lesson creation transaction could not complete; nothing was written."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Creating lesson failed, please try again.",
            "CREATE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class DeleteFailedError(LessonMapError):
    """Lesson deletion transaction could not complete; nothing was removed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Something went wrong, could not delete lesson.",
            "DELETE_FAILED", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
