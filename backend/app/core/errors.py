"""Error Hierarchy - typed, categorized exceptions for LAMP API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - failure_payload() produces the single Error-shaped response body:
      {"error": <message>, "code": <machine code>}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with LampError base: the code travels with the failure
    - ErrorContext as dataclass: the client message can differ from the logged one
    - SchemaDefinitionError is startup-only: it never reaches a client
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    SCHEMA = "schema"


@dataclass
class ErrorContext:
    """Client-facing override for the failure message."""
    user_message: str | None = None


class LampError(Exception):
    """Base exception for all LAMP API errors."""

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


def failure_payload(exc: BaseException) -> dict[str, str]:
    """Error-shaped JSON body for a failure raised by a bound handler."""
    if isinstance(exc, LampError):
        return {
            "error": exc.context.user_message or exc.message,
            "code": exc.code,
        }
    return {"error": str(exc) or type(exc).__name__, "code": type(exc).__name__}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InvalidInputError(LampError):
    """Request input could not be accepted."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(LampError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(LampError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class SchemaDefinitionError(LampError):
    """API schema breaks a structural rule. Raised at startup, before routing."""
    def __init__(self, violations: list[dict], context: ErrorContext | None = None):
        lines = [v["message"] for v in violations]
        super().__init__(
            "Invalid API schema: " + "; ".join(lines),
            "SCHEMA_DEFINITION_ERROR", ErrorCategory.SCHEMA,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.violations = violations
