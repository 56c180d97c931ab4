"""Error Hierarchy — typed, categorized exceptions for all guestbook failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are raised before any write to storage
    - to_response() produces the REST envelope used by every non-2xx response
    - StorageError messages are opaque; the underlying cause is only logged

Design Decisions:
    - Single hierarchy with GuestbookError base: one global handler maps all of them
    - WindowExpiredError is a ForbiddenError subclass: same status, distinct code
"""

from datetime import datetime, timezone
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
    STORAGE = "storage"
    INTERNAL = "internal"


class GuestbookError(Exception):
    """Base exception for all guestbook errors."""

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
        self.timestamp = datetime.now(timezone.utc)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.timestamp.isoformat(),
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class InputValidationError(GuestbookError):
    """A required field is missing, blank or too long."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class UnauthorizedError(GuestbookError):
    """No usable credential was presented."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class InvalidCredentialsError(GuestbookError):
    """Admin login with a wrong username or password."""
    def __init__(self):
        super().__init__(
            "Invalid credentials", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, 401,
        )


class ForbiddenError(GuestbookError):
    """Credential is valid but does not own the target message."""
    def __init__(
        self,
        message: str = "You can only modify your own messages",
        code: str = "FORBIDDEN",
    ):
        super().__init__(
            message, code, ErrorCategory.AUTHORIZATION,
            ErrorSeverity.WARNING, 403,
        )


class WindowExpiredError(ForbiddenError):
    """Owner is correct but the edit/delete window has closed."""
    def __init__(self, window_days: int):
        super().__init__(
            f"Messages can only be changed within {window_days} days of posting",
            "EDIT_WINDOW_EXPIRED",
        )
        self.window_days = window_days


class ResourceNotFoundError(GuestbookError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(GuestbookError):
    """Reading, parsing or writing the message file failed."""
    def __init__(self, operation: str):
        super().__init__(
            f"Failed to {operation} messages", "STORAGE_ERROR",
            ErrorCategory.STORAGE, ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
