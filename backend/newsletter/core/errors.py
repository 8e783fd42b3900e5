"""Error Hierarchy — typed, categorized exceptions for every Newsletter failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error carries the HTTP status it is surfaced as
    - Responses for these errors never carry a body; details go to the logs only

Design Decisions:
    - Single hierarchy with NewsletterError base: one FastAPI global handler catches all
    - to_log_extra() instead of a response envelope: the HTTP surface is status-only
"""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class NewsletterError(Exception):
    """Base exception for all Newsletter errors."""

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

    def to_log_extra(self) -> dict[str, Any]:
        """Structured fields attached to the log record for this error."""
        return {
            "error_code": self.code,
            "error_category": self.category.value,
            "severity": self.severity.value,
            "http_status": self.http_status,
        }


# ─── Request Errors (400-level) ─────────────────────────────────

class RouteNotFoundError(NewsletterError):
    """No registered route matches the request method and path."""
    def __init__(self, method: str, path: str):
        super().__init__(
            f"No route matches {method} {path!r}",
            "ROUTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
        )
        self.method = method
        self.path = path


class DecodeFailureError(NewsletterError):
    """Request body could not be decoded into the expected shape."""
    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(
            message, "DECODE_FAILURE", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.fields = fields or []

    def to_log_extra(self) -> dict[str, Any]:
        extra = super().to_log_extra()
        if self.fields:
            extra["fields"] = self.fields
        return extra


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(NewsletterError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 503,
        )
        self.operation = operation


class ConfigurationError(NewsletterError):
    """Settings or route table are invalid; raised before serving."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFIGURATION_ERROR", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )
