"""
Service Error Taxonomy

Every business-rule failure raised by a service is a ServiceError carrying a
machine-readable error code and the HTTP status the routers should return.
Routers translate them with `to_http_exception`; anything else becomes a
generic 500 through `internal_error`.
"""

import logging
from datetime import date

from fastapi import HTTPException, status

from wil_api.core.config import settings

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)

    def extra(self) -> dict:
        """Additional fields to include in the error response."""
        return {}


class InvalidInputError(ServiceError):
    """Raised when a request field is missing or malformed."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="INVALID_INPUT", status_code=400)


class NotFoundError(ServiceError):
    """Raised when no row matches the requested identifier."""

    def __init__(self, entity: str, identifier: object | None = None):
        message = f"{entity} {identifier} not found" if identifier is not None else f"{entity} not found"
        super().__init__(message=message, error_code="NOT_FOUND", status_code=404)


class InvalidStatusError(ServiceError):
    """Raised when a status value is outside the allowed set."""

    def __init__(self, value: str, allowed: list[str]):
        super().__init__(
            message=f"Invalid status value '{value}'. Allowed: {', '.join(allowed)}",
            error_code="INVALID_STATUS",
            status_code=400,
        )


class InvalidCodeError(ServiceError):
    """Raised when a one-time code does not exist (never issued or already used)."""

    def __init__(self, message: str = "Invalid code"):
        super().__init__(message=message, error_code="INVALID_CODE", status_code=400)


class EmailBlockedError(ServiceError):
    """Raised when the email tied to a signup code is blocked."""

    def __init__(self):
        super().__init__(
            message="This email is blocked from signing up",
            error_code="EMAIL_BLOCKED",
            status_code=400,
        )


class DuplicateAccountError(ServiceError):
    """Raised when an account with the same email already exists."""

    def __init__(self, message: str = "Email already exists"):
        super().__init__(message=message, error_code="DUPLICATE_ACCOUNT", status_code=409)


class DuplicateRecordError(ServiceError):
    """Raised when a record violates a uniqueness rule other than account email."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="DUPLICATE_RECORD", status_code=409)


class StaleActivityError(ServiceError):
    """Raised when reactivation is attempted without recent logsheet activity."""

    def __init__(
        self,
        message: str,
        last_activity_date: date | None = None,
        days_since_last_activity: int | None = None,
    ):
        self.last_activity_date = last_activity_date
        self.days_since_last_activity = days_since_last_activity
        super().__init__(message=message, error_code="STALE_ACTIVITY", status_code=400)

    def extra(self) -> dict:
        return {
            "last_activity_date": (
                self.last_activity_date.isoformat() if self.last_activity_date else None
            ),
            "days_since_last_activity": self.days_since_last_activity,
        }


class RegistrationRejectedError(ServiceError):
    """Raised when an event registration is not allowed."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="REGISTRATION_REJECTED", status_code=403)


class CodeGenerationExhaustedError(ServiceError):
    """Raised when no unused code could be generated within the attempt budget."""

    def __init__(self, kind: str, attempts: int):
        super().__init__(
            message=f"Failed to generate a unique {kind} code after {attempts} attempts",
            error_code="CODE_GENERATION_EXHAUSTED",
            status_code=500,
        )


class TransactionFailureError(ServiceError):
    """Raised when the database rejects a transaction for an unexpected reason."""

    def __init__(self, operation: str, detail: str | None = None):
        self.detail = detail
        super().__init__(
            message=f"Database operation failed: {operation}",
            error_code="TRANSACTION_FAILURE",
            status_code=500,
        )

    def extra(self) -> dict:
        if settings.is_development and self.detail:
            return {"details": self.detail}
        return {}


class NotificationFailure(Exception):
    """
    Raised by the email layer when a message could not be delivered.

    Never propagated past the service that triggered the notification.
    """


def to_http_exception(e: ServiceError) -> HTTPException:
    """Convert a service error to an HTTPException with a structured body."""
    return HTTPException(
        status_code=e.status_code,
        detail={
            "success": False,
            "error": e.error_code,
            "message": e.message,
            **e.extra(),
        },
    )


def internal_error(e: Exception, action: str) -> HTTPException:
    """
    Build the 500 response for an unexpected error.

    The underlying error text is only exposed in development.
    """
    logger.exception(f"Unexpected error while trying to {action}: {e}")
    detail = {
        "success": False,
        "error": "INTERNAL_ERROR",
        "message": f"Failed to {action}. Please try again later.",
    }
    if settings.is_development:
        detail["details"] = str(e)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
