"""
Core Errors Module

Typed errors for the clinic scheduling service and their HTTP mapping.
Algorithms raise ValidationError on malformed input; the store client raises
NotFoundError / ServiceUnavailableError on backend failures. "Nothing found"
(no slots, no matching client) is never an error.

Usage:
    from clinic_service.core.errors import ValidationError, error_payload

    raise ValidationError("Invalid time '9h30'", details={"field": "start"})

    payload = error_payload("invalid_input", "Bad request", trace_id="abc123")
"""

import logging
from typing import Any, Dict, Optional, Type

logger = logging.getLogger(__name__)


# ==================== Base Error Class ====================

class AppError(Exception):
    """
    Base application error.

    Subclasses set `status_code`, `default_message` and optionally
    `error_code`; when `error_code` is unset the code is derived from the
    class name (NotFoundError -> "not_found").

    Attributes:
        code: Machine-readable error code
        message: Human-readable error message
        details: Additional error context (may be empty)
        status_code: HTTP status code returned to API callers
    """

    status_code: int = 500
    default_message: str = "Application error"
    error_code: Optional[str] = None

    def __init__(
        self,
        message: Optional[str] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = code or self.error_code or self._default_code()
        self.details = details or {}
        self.status_code = status_code or type(self).status_code

    def _default_code(self) -> str:
        name = type(self).__name__
        if name.endswith("Error"):
            name = name[:-len("Error")]

        chars = []
        for index, char in enumerate(name):
            if char.isupper() and index > 0:
                chars.append("_")
            chars.append(char.lower())
        return "".join(chars)

    def to_dict(self, trace_id: Optional[str] = None) -> Dict[str, Any]:
        """Error body for JSON responses (see error_payload)."""
        return error_payload(self.code, self.message, self.details, trace_id)


# ==================== Specific Error Classes ====================

class ValidationError(AppError):
    """
    Malformed input (400).

    Bad "HH:MM" strings, inverted availability windows, empty match
    identifiers, scan files that are too short.
    """
    status_code = 400
    default_message = "Validation failed"
    error_code = "validation_error"


class UnauthorizedError(AppError):
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(AppError):
    status_code = 403
    default_message = "Access forbidden"


class NotFoundError(AppError):
    """A staff member, service or client does not exist in the store (404)."""
    status_code = 404
    default_message = "Resource not found"


class ServiceUnavailableError(AppError):
    """The clinic data store is unreachable, timing out or failing (503)."""
    status_code = 503
    default_message = "Service temporarily unavailable"


class InternalError(AppError):
    """Unexpected failure, including store data this service cannot use (500)."""
    status_code = 500
    default_message = "Internal server error"
    error_code = "internal_error"


_ERRORS_BY_STATUS: Dict[int, Type[AppError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
}

_SAFE_MESSAGES: Dict[int, str] = {
    401: "Authentication required",
    403: "Access forbidden",
    404: "Resource not found",
}


# ==================== Helper Functions ====================

def error_payload(
    code: str,
    message: str,
    details: Optional[Dict[str, Any]] = None,
    trace_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Build the {code, message, details?, trace_id?} error body.

    Example:
        >>> error_payload("bad_request", "Invalid input", trace_id="abc123")["code"]
        'bad_request'
    """
    payload: Dict[str, Any] = {"code": code, "message": message}
    if details:
        payload["details"] = details
    if trace_id:
        payload["trace_id"] = trace_id
    return payload


def _backend_detail(e: Exception, status_code: int) -> str:
    response = getattr(e, "response", None)
    if response is None:
        return str(getattr(e, "detail", e))

    try:
        body = response.json()
    except ValueError:
        return response.text or f"HTTP {status_code}"

    if isinstance(body, dict):
        return body.get("message") or body.get("detail") or str(body)
    return str(body)


def from_http_exception(
    e: Exception,
    default_code: str = "service_error",
    safe_message: bool = True
) -> AppError:
    """
    Convert an httpx.HTTPStatusError (or fastapi HTTPException) to AppError.

    400/401/403/404 map to their AppError subclass, any 5xx to
    ServiceUnavailableError, anything else to a plain AppError carrying the
    original status and `default_code`. With safe_message=True the store's
    own error text is replaced by a generic message for 401/403/404/5xx so
    store internals never reach API callers.
    """
    response = getattr(e, "response", None)
    if response is not None:
        status_code = response.status_code
    else:
        status_code = getattr(e, "status_code", 500)

    message = _backend_detail(e, status_code)

    if safe_message:
        if status_code >= 500:
            logger.error(f"Backend error ({status_code}): {message}")
            message = "Service error"
        else:
            message = _SAFE_MESSAGES.get(status_code, message)

    if status_code >= 500:
        return ServiceUnavailableError(message)

    error_class = _ERRORS_BY_STATUS.get(status_code)
    if error_class is not None:
        return error_class(message)

    return AppError(message, code=default_code, status_code=status_code)


def to_http_exception(error: AppError):
    """
    Convert AppError to a FastAPI HTTPException whose detail is the error body.

    Example:
        >>> to_http_exception(ValidationError("Invalid input")).status_code
        400
    """
    from fastapi import HTTPException
    from clinic_service.core.logging import get_trace_id

    trace_id = get_trace_id()

    return HTTPException(
        status_code=error.status_code,
        detail=error.to_dict(trace_id=None if trace_id == "-" else trace_id)
    )
