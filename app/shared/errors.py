"""
Error taxonomy and standardized error responses for the insight service.

Domain exceptions raised by the insight pipeline carry an ErrorCode, and the
API layer turns them into the consistent JSON error envelope below, tagged
with the request's correlation ID.

Usage:
    raise InvalidDateFormat("2024-3-4")

    # In the app-level exception handler:
    return insight_error_response(exc, correlation_id=get_correlation_id(request))
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel
from fastapi import Request
from fastapi.responses import JSONResponse


class ErrorCode(str, Enum):
    """Standard error codes used across the service."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    UNAUTHORIZED = "UNAUTHORIZED"
    RATE_LIMITED = "RATE_LIMITED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"

    # Domain-specific errors
    PROCESSING_ERROR = "PROCESSING_ERROR"


# =============================================================================
# DOMAIN EXCEPTIONS
# =============================================================================

class InsightError(Exception):
    """Base class for failures of the weekly insight pipeline."""

    code: ErrorCode = ErrorCode.INTERNAL_ERROR
    status_code: int = 500

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidDateFormat(InsightError):
    """A week key did not match the strict YYYY-MM-DD shape."""

    code = ErrorCode.VALIDATION_ERROR
    status_code = 400

    def __init__(self, value: Any):
        super().__init__(
            "weekStart must be in YYYY-MM-DD format",
            details={"field": "weekStart", "value": str(value)},
        )
        self.value = value


class UserNotFound(InsightError):
    """The user profile needed for a generation does not exist."""

    code = ErrorCode.NOT_FOUND
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__(
            "User not found",
            details={"resource_type": "user", "resource_id": user_id},
        )
        self.user_id = user_id


class AIGenerationFailed(InsightError):
    """The AI completion call failed; `kind` is the upstream classification."""

    code = ErrorCode.EXTERNAL_SERVICE_ERROR
    status_code = 502

    def __init__(self, message: str, kind: str = "unknown"):
        super().__init__(message, details={"service": "anthropic", "kind": kind})
        self.kind = kind
        if kind == "rate_limited":
            self.code = ErrorCode.RATE_LIMITED
            self.status_code = 429


class MalformedAIResponse(InsightError):
    """The AI returned data that violates the insight output contract."""

    code = ErrorCode.PROCESSING_ERROR
    status_code = 502

    def __init__(self, reason: str):
        super().__init__("Failed to parse AI insights", details={"reason": reason})
        self.reason = reason


# =============================================================================
# RESPONSE HELPERS
# =============================================================================

class ErrorDetail(BaseModel):
    """Body of the `error` key in every failed response."""
    code: str
    message: str
    details: Optional[dict[str, Any]] = None
    correlation_id: Optional[str] = None


def get_correlation_id(request: Optional[Request] = None) -> Optional[str]:
    """Correlation ID stored on the request by CorrelationMiddleware, if any."""
    if request is None:
        return None
    return getattr(request.state, "correlation_id", None)


def error_response(
    code: ErrorCode,
    message: str,
    status_code: int,
    details: Optional[dict[str, Any]] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """
    Build the `{"success": false, "error": {...}}` envelope.

    Keys that are None (no details, no correlation ID) are left out.
    """
    error_detail = ErrorDetail(
        code=code.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
    )
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": error_detail.model_dump(exclude_none=True)},
    )


def insight_error_response(
    exc: InsightError,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """Render a domain exception with its own code and status."""
    return error_response(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        correlation_id=correlation_id,
    )


def not_found_error(
    message: str,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """404 for a missing insight (or any other resource)."""
    details = {
        key: value
        for key, value in (("resource_type", resource_type), ("resource_id", resource_id))
        if value
    }
    return error_response(
        code=ErrorCode.NOT_FOUND,
        message=message,
        status_code=404,
        details=details or None,
        correlation_id=correlation_id,
    )


def unauthorized_error(
    message: str = "Authentication required",
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """401 when the caller's user ID is missing."""
    return error_response(
        code=ErrorCode.UNAUTHORIZED,
        message=message,
        status_code=401,
        correlation_id=correlation_id,
    )


def internal_error(
    message: str = "Internal server error",
    correlation_id: Optional[str] = None,
) -> JSONResponse:
    """500 for unexpected failures. Never pass exception text here."""
    return error_response(
        code=ErrorCode.INTERNAL_ERROR,
        message=message,
        status_code=500,
        correlation_id=correlation_id,
    )
