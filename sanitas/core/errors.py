"""Error Hierarchy — typed, categorized exceptions for every Sanitas failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry a message safe to show to the user
    - to_response() produces the single error body shape used by all endpoints

Design Decisions:
    - Single hierarchy with SanitasError base: the request pipeline and the
      FastAPI global handler both catch it (uniform error shape across endpoints)
"""

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
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class SanitasError(Exception):
    """Base exception for all Sanitas errors."""

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
        """Convert to standardized REST error body."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class BadRequestError(SanitasError):
    """Missing or malformed request parameter."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "BAD_REQUEST", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class MethodNotAllowedError(SanitasError):
    """HTTP method not accepted by the endpoint."""
    def __init__(self, path: str, allowed: str, received: str):
        super().__init__(
            f"{path} only accepts {allowed} method, you tried: {received}",
            "METHOD_NOT_ALLOWED", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 405,
        )
        self.allowed = allowed


class ResourceNotFoundError(SanitasError):
    """Requested resource does not exist."""
    def __init__(self, message: str):
        super().__init__(
            message, "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )


class ConflictError(SanitasError):
    """Insert collided with a unique constraint."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(SanitasError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
