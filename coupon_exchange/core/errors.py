"""Error Hierarchy - every failure the coupon exchange reports to a caller.

Invariants:
    - Each subclass fixes its code, category, severity and HTTP status as
      class attributes; instances only add a message and an ErrorContext
    - 4xx errors are raised before any write happens
    - 5xx errors never carry storage error text to the client
    - to_response() is the only REST envelope the API emits for them

Design Decisions:
    - CouponRedemptionConflictError has one fixed message for "not found",
      "already used" and "expired"; callers cannot tell them apart
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
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Identifiers involved in the failure, echoed back and logged."""
    store_id: str | None = None
    coupon_id: str | None = None
    deal_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def ids(self) -> dict:
        return {
            "store_id": self.store_id,
            "coupon_id": self.coupon_id,
            "deal_id": self.deal_id,
        }


class CouponExchangeError(Exception):
    """Base for all coupon exchange errors; caught by the global handler."""

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
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": self.context.ids(),
            }
        }


# --- Caller errors (4xx) ---------------------------------------------------

class InputValidationError(CouponExchangeError):
    """A submitted field is missing or malformed."""

    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    http_status = 400

    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(message, context)
        self.field = field


class ResourceNotFoundError(CouponExchangeError):
    code = "RESOURCE_NOT_FOUND"
    category = ErrorCategory.RESOURCE_NOT_FOUND
    http_status = 404

    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(f"{resource_type} '{resource_id}' not found", context)
        self.resource_type = resource_type
        self.resource_id = resource_id


class CouponRedemptionConflictError(CouponExchangeError):
    """The conditional redemption update matched no row."""

    USER_MESSAGE = "Coupon verification failed: this coupon is invalid or has already been used."

    code = "COUPON_NOT_REDEEMABLE"
    category = ErrorCategory.CONFLICT
    severity = ErrorSeverity.WARNING
    http_status = 409

    def __init__(self, context: ErrorContext | None = None):
        super().__init__(self.USER_MESSAGE, context)


# --- Infrastructure errors (5xx) -------------------------------------------

class DatabaseError(CouponExchangeError):
    """Statement failed or the database is unreachable."""

    code = "DATABASE_ERROR"
    category = ErrorCategory.DATABASE
    severity = ErrorSeverity.CRITICAL
    http_status = 503

    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(f"Database {operation} failed: {message}", context)
        self.operation = operation


class CouponIssueFailedError(CouponExchangeError):
    """Coupon insert failed or returned no id."""

    code = "COUPON_ISSUE_FAILED"
    severity = ErrorSeverity.CRITICAL

    def __init__(self, reason: str, context: ErrorContext | None = None):
        super().__init__(f"Coupon could not be issued: {reason}", context)
