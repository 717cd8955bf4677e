"""Error Hierarchy — typed, categorized exceptions for all Instance API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are permanent for the request; backend errors (503) are not
    - to_response() produces the REST failure envelope ({"success": false, "error": {...}})
    - Passwords and contents never appear in messages or context

Design Decisions:
    - Single hierarchy with InstanceAPIError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Collision maps to 503, not 409: it signals id-space contention ("server busy"),
      not a client mistake
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
    FORBIDDEN = "forbidden"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    BACKEND = "backend"
    TIMEOUT = "timeout"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    instance_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None
    retry_after_ms: int | None = None


class InstanceAPIError(Exception):
    """Base exception for all Instance API errors."""

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
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "instance_id": self.context.instance_id,
                    "operation": self.context.operation,
                    "retry_after_ms": self.context.retry_after_ms,
                },
            },
        }


# ─── Domain Errors ──────────────────────────────────────────────

class InstanceCollisionError(InstanceAPIError):
    """Candidate id already held by a live instance."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Too many live instances or bad luck; try again",
            "INSTANCE_COLLISION", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 503,
        )


class InstanceForbiddenError(InstanceAPIError):
    """Supplied password does not match the stored one."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Wrong password",
            "INSTANCE_FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class InstanceNotFoundError(InstanceAPIError):
    """No live instance for the given id (never created, expired or destroyed)."""
    def __init__(self, instance_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.instance_id = instance_id
        super().__init__(
            f"Instance '{instance_id}' not found",
            "INSTANCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class BackendError(InstanceAPIError):
    """Atomic store call did not complete in a well-defined way.

    ambiguous=True means the mutation may or may not have been applied
    (transport timeout). Callers must not assume it failed cleanly.
    """
    def __init__(
        self,
        message: str,
        operation: str,
        ambiguous: bool = False,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Store {operation} failed: {message}",
            "BACKEND_ERROR",
            ErrorCategory.TIMEOUT if ambiguous else ErrorCategory.BACKEND,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
        self.ambiguous = ambiguous
