"""Error Hierarchy — typed, categorized exceptions for every newsletter failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Each component owns a closed family: SubscribeError, ConfirmationError,
      AuthError, PublishError — the boundary maps the concrete class to a status
    - Validation errors (400) are the only client-fault errors
    - 401 responses carry no body: an unknown token, an unknown username and a
      wrong password all look the same from outside
    - 5xx responses carry the single canonical INTERNAL_ERROR envelope; the
      operation name and causal chain stay in the server logs
    - 400 bodies carry the field name and public_message; the internal message
      (which may quote the submitted value) is logged only

Design Decisions:
    - Single hierarchy with NewsletterError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - ErrorContext as dataclass: correlation data for logs without coupling to the
      logging framework
    - Causal chain via `raise ... from exc` instead of wrapping strings
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
    DATABASE = "database"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


INTERNAL_ERROR_RESPONSE = {
    "error": {
        "code": "INTERNAL_ERROR",
        "message": "An unexpected error occurred",
        "category": ErrorCategory.INTERNAL.value,
        "severity": ErrorSeverity.CRITICAL.value,
    },
}


class NewsletterError(Exception):
    """Base exception for all newsletter service errors."""

    # Shown to end users (flash messages, 400 bodies). Never the internal message.
    public_message = "Something went wrong"

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

    @property
    def is_client_fault(self) -> bool:
        return 400 <= self.http_status < 500

    @property
    def response_headers(self) -> dict[str, str]:
        """Extra headers the boundary must attach to the response."""
        return {}

    def to_response(self) -> dict | None:
        """Convert to standardized REST error response (None = empty body)."""
        if self.http_status == 401:
            return None
        if not self.is_client_fault:
            return INTERNAL_ERROR_RESPONSE
        return {
            "error": {
                "code": self.code,
                "message": self.public_message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "request_id": self.context.request_id,
            }
        }


# ─── Subscription Workflow ──────────────────────────────────────

class SubscribeError(NewsletterError):
    """Base for failures of the create-and-token-issue workflow."""


class SubscriberValidationError(SubscribeError):
    """Name or email failed validation."""
    public_message = "Invalid subscriber details"

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["details"] = [
            {"field": self.field, "message": self.public_message},
        ]
        return response


class PoolError(SubscribeError):
    """Could not acquire a connection/transaction from the pool."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to acquire a Postgres connection from the pool",
            "POOL_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class InsertSubscriberError(SubscribeError):
    """Insert of the subscriber row failed (including duplicate email)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to insert new subscriber in the database",
            "INSERT_SUBSCRIBER_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 500,
        )


class StoreTokenError(SubscribeError):
    """Insert of the confirmation token row failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "A database error was encountered while trying to store a subscription token",
            "STORE_TOKEN_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 500,
        )


class TransactionCommitError(SubscribeError):
    """Commit of the subscriber + token transaction failed."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to commit SQL transaction to store a new subscriber",
            "TRANSACTION_COMMIT_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )


class SendEmailError(SubscribeError):
    """Confirmation email could not be delivered (subscriber is already stored)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Failed to send a confirmation email",
            "SEND_EMAIL_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 500,
        )


# ─── Confirmation ───────────────────────────────────────────────

class ConfirmationError(NewsletterError):
    """Base for failures while confirming a pending subscriber."""


class UnknownTokenError(ConfirmationError):
    """Token was never issued (or is malformed) — same 401 either way."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "There is no subscriber associated with the provided token",
            "UNKNOWN_TOKEN", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class ConfirmationUnexpectedError(ConfirmationError):
    """Storage failure during token lookup or status update."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Failed to confirm subscriber: {operation}",
            "CONFIRMATION_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.ERROR, context, 500,
        )
        self.operation = operation


# ─── Credentials ────────────────────────────────────────────────

class AuthError(NewsletterError):
    """Base for credential validation failures."""


class InvalidCredentialsError(AuthError):
    """Unknown username or wrong password. Deliberately one class for both."""
    public_message = "Authentication failed"

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Invalid credentials", "INVALID_CREDENTIALS",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class AuthUnexpectedError(AuthError):
    """Storage failure, malformed stored hash, or verification worker failure."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AUTH_UNEXPECTED_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Newsletter Publishing ──────────────────────────────────────

class PublishError(NewsletterError):
    """Base for newsletter publishing failures."""


class PublishAuthError(PublishError):
    """Missing/malformed Basic credentials or rejected credentials."""
    def __init__(self, message: str = "Authentication failed", context: ErrorContext | None = None):
        super().__init__(
            message, "PUBLISH_AUTH_ERROR", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )

    @property
    def response_headers(self) -> dict[str, str]:
        return {"WWW-Authenticate": 'Basic realm="publish"'}


class PublishUnexpectedError(PublishError):
    """Storage, credential-store or transport failure during publishing."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "PUBLISH_UNEXPECTED_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(NewsletterError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation


class EmailDeliveryError(NewsletterError):
    """Email provider rejected the request, was unreachable, or timed out."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Email provider error: {message}",
            "EMAIL_DELIVERY_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 502,
        )
