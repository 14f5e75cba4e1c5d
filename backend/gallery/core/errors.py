"""Error Hierarchy: typed, categorized exceptions for every gallery failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope {"error": <message>}
    - Infrastructure messages are generic; the real cause is only logged

Design Decisions:
    - Single hierarchy with GalleryError base: one FastAPI handler renders them all
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
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    UPLOAD = "upload"
    DATABASE = "database"
    INTERNAL = "internal"


class GalleryError(Exception):
    """Base exception for all gallery errors."""

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

class RequestValidationFailed(GalleryError):
    """Request payload failed schema validation."""
    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, 400,
        )
        self.field = field


class UploadRejectedError(GalleryError):
    """Uploaded image is missing, of a disallowed type, or too large."""
    def __init__(self, message: str):
        super().__init__(
            message, "UPLOAD_REJECTED", ErrorCategory.UPLOAD,
            ErrorSeverity.WARNING, 400,
        )


class AuthenticationError(GalleryError):
    """Missing/invalid admin session, or rejected credentials."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, 401,
        )


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Same message for unknown user and wrong password."""
    def __init__(self):
        super().__init__("Invalid credentials")
        self.code = "INVALID_CREDENTIALS"


class ResourceNotFoundError(GalleryError):
    """Requested resource does not exist."""
    def __init__(self, resource_type: str, message: str | None = None):
        super().__init__(
            message or f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.INFO, 404,
        )
        self.resource_type = resource_type


class ConflictError(GalleryError):
    """Unique value already taken."""
    def __init__(self, message: str):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, 409,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(GalleryError):
    """Database operation failed. Message is generic; operation kept for logs."""
    def __init__(self, operation: str):
        super().__init__(
            "Internal server error",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
