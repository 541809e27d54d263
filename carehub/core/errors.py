"""Error classification for service and API failures."""

from enum import Enum

from pydantic import BaseModel, ValidationError

from carehub.core.db_client import DatabaseError, RecordNotFoundError


class InvalidStateTransitionError(ValueError):
    """Raised when a record cannot move to the requested state."""


class ErrorSeverity(Enum):
    """Severity levels for errors."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCode:
    """Error codes for specific error conditions."""

    ERR_RECORD_NOT_FOUND = "ERR_RECORD_NOT_FOUND"
    ERR_INVALID_STATE_TRANSITION = "ERR_INVALID_STATE_TRANSITION"
    ERR_VALIDATION = "ERR_VALIDATION"
    ERR_STORE = "ERR_STORE"
    ERR_UNKNOWN = "ERR_UNKNOWN"


_HTTP_STATUS_BY_CODE = {
    ErrorCode.ERR_RECORD_NOT_FOUND: 404,
    ErrorCode.ERR_INVALID_STATE_TRANSITION: 409,
    ErrorCode.ERR_VALIDATION: 400,
    ErrorCode.ERR_STORE: 500,
    ErrorCode.ERR_UNKNOWN: 500,
}


class ErrorResponse(BaseModel):
    """Structured error response with user-friendly messaging."""

    code: str
    message: str
    suggestion: str
    severity: ErrorSeverity

    @property
    def http_status(self) -> int:
        """HTTP status code matching the error code."""
        return _HTTP_STATUS_BY_CODE.get(self.code, 500)


def classify_error_with_response(exception: Exception) -> ErrorResponse:
    """Classify an error and return a structured response with recovery suggestions.

    Args:
        exception: The exception raised during execution

    Returns:
        ErrorResponse with code, message, suggestion, and severity
    """
    if isinstance(exception, RecordNotFoundError):
        return ErrorResponse(
            code=ErrorCode.ERR_RECORD_NOT_FOUND,
            message=str(exception),
            suggestion="Refresh the list and pick an existing record.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, DatabaseError):
        return ErrorResponse(
            code=ErrorCode.ERR_STORE,
            message="The record store rejected the operation.",
            suggestion="Please try again. If the problem persists, restart the service.",
            severity=ErrorSeverity.HIGH,
        )

    if isinstance(exception, InvalidStateTransitionError):
        return ErrorResponse(
            code=ErrorCode.ERR_INVALID_STATE_TRANSITION,
            message=str(exception),
            suggestion="Reload the record to see its current state and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ValidationError):
        first = exception.errors()[0] if exception.errors() else {"msg": str(exception)}
        return ErrorResponse(
            code=ErrorCode.ERR_VALIDATION,
            message=str(first.get("msg", "Invalid data.")),
            suggestion="Check the submitted fields and try again.",
            severity=ErrorSeverity.LOW,
        )

    if isinstance(exception, ValueError):
        return ErrorResponse(
            code=ErrorCode.ERR_VALIDATION,
            message=str(exception),
            suggestion="Check the submitted fields and try again.",
            severity=ErrorSeverity.LOW,
        )

    return ErrorResponse(
        code=ErrorCode.ERR_UNKNOWN,
        message="An unexpected error occurred.",
        suggestion="Please try again later. If the problem persists, contact support.",
        severity=ErrorSeverity.MEDIUM,
    )
