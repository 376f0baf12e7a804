"""Error Hierarchy — typed failures raised across the identity service.

Invariants:
    - Each error class fixes its code, category, severity and HTTP status as class attributes
    - Form and remote user errors answer 400; a dead session answers 401 (rendered as a
      logout redirect by the HTTP shell); transport failures answer 503
    - RemoteAPIError is raised only by the storefront client, never inferred by callers
    - to_response() shows context.user_message when set, so transport detail stays in logs

Design Decisions:
    - Class attributes over constructor plumbing: a subclass is its classification
    - ErrorContext as dataclass: observability without coupling to the logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class ErrorSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where the failure happened and what the shopper may be told."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    user_message: str | None = None
    retry_after_ms: int | None = None


class StorefrontIdentityError(Exception):
    """Base exception for all identity-layer errors."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    severity = ErrorSeverity.ERROR
    http_status = 500

    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.context.user_message or self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "operation": self.context.operation,
                "retry_after_ms": self.context.retry_after_ms,
            },
        }


# ─── Shopper-facing (400-level) ──────────────────────────────────

class FormValidationError(StorefrontIdentityError):
    """Submitted form failed local validation. No remote call was made."""

    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(message, context)
        self.field = field


class RemoteUserError(StorefrontIdentityError):
    """The remote API accepted the request but rejected the operation (userErrors)."""

    code = "REMOTE_USER_ERROR"
    category = ErrorCategory.BUSINESS_RULE
    severity = ErrorSeverity.WARNING
    http_status = 400

    def __init__(self, user_errors: list[dict], context: ErrorContext | None = None):
        text = ", ".join(
            str(e["message"]) for e in user_errors if e.get("message")
        )
        super().__init__(text or "Remote operation rejected", context)
        self.user_errors = user_errors


class SessionExpiredError(StorefrontIdentityError):
    """No customer token, or the remote API no longer resolves it to a customer."""

    code = "SESSION_EXPIRED"
    category = ErrorCategory.AUTHENTICATION
    severity = ErrorSeverity.WARNING
    http_status = 401

    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Customer access token is missing or expired", context)


class ResourceNotFoundError(StorefrontIdentityError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)


# ─── Remote service (500-level) ──────────────────────────────────

class RemoteAPIError(StorefrontIdentityError):
    """Storefront API call failed at the transport or protocol level.

    api_error_type is one of: timeout, connection_error, rate_limit, server_error,
    client_error, malformed_response, graphql_error.
    """

    code = "STOREFRONT_API_ERROR"
    category = ErrorCategory.EXTERNAL_API
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(
        self,
        message: str,
        api_error_type: str,
        status_code: int | None = None,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.retry_after_ms = retry_after_ms
        ctx.user_message = ctx.user_message or "Storefront service unavailable"
        super().__init__(f"Storefront API error ({api_error_type}): {message}", ctx)
        self.api_error_type = api_error_type
        self.status_code = status_code
