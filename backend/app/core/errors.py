"""Error Hierarchy — typed, categorized exceptions for all user-registry failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; persistence errors (500-level) are critical
    - to_response() produces the REST error envelope used by global handlers
    - str(exc) is the human-readable message (user routes echo it back as "error")

Design Decisions:
    - Single hierarchy with UserRegistryError base: FastAPI global handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
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
    DATA_FORMAT = "data_format"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: int | None = None
    field_name: str | None = None


class UserRegistryError(Exception):
    """Base exception for all user-registry errors."""

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
                    "user_id": self.context.user_id,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class UserValidationError(UserRegistryError):
    """One or more field rules rejected the candidate user."""
    def __init__(self, messages: list[str], context: ErrorContext | None = None):
        super().__init__(
            "; ".join(messages) or "Invalid user data",
            "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.messages = list(messages)

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = self.messages
        return response


class DataFormatError(UserRegistryError):
    """Input value cannot be interpreted (malformed JSON, unparseable date, missing key)."""
    def __init__(
        self, message: str, field: str | None = None, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "DATA_FORMAT_ERROR", ErrorCategory.DATA_FORMAT,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class ResourceNotFoundError(UserRegistryError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class PersistenceError(UserRegistryError):
    """Store operation failed (constraint violation, connection loss, driver error)."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "PERSISTENCE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
