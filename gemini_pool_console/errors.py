"""Console error types.

Every failure reaching a console service is a ConsoleError. Subclasses are
keyed by HTTP status so callers can branch on the kind of failure without
looking at raw responses.
"""

from __future__ import annotations

from typing import Any


class ConsoleError(Exception):
    """Base error for all console exceptions."""

    code: str = "internal_error"
    message: str = "An internal error occurred"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.server_message = message
        self.message = message or self.__class__.message
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(ConsoleError):
    """Request rejected as invalid (400), or a local field check failed."""

    code = "validation_error"
    message = "Validation error"
    status_code = 400


class UnauthorizedError(ConsoleError):
    """Authentication required or token rejected (401)."""

    code = "unauthorized"
    message = "Authentication required"
    status_code = 401


class ForbiddenError(ConsoleError):
    """Permission denied (403)."""

    code = "forbidden"
    message = "Permission denied"
    status_code = 403


class NotFoundError(ConsoleError):
    """Resource not found (404)."""

    code = "not_found"
    message = "Resource not found"
    status_code = 404


class ConflictError(ConsoleError):
    """Conflict, e.g. a duplicate key name or value (409)."""

    code = "conflict"
    message = "Conflict"
    status_code = 409


class RateLimitedError(ConsoleError):
    """Too many requests (429)."""

    code = "rate_limited"
    message = "Too many requests"
    status_code = 429


class ServerError(ConsoleError):
    """Gateway failed to handle the request (5xx)."""

    code = "server_error"
    message = "Server error"
    status_code = 500


class NetworkError(ConsoleError):
    """The request could not complete (connection refused, timeout, ...).

    No status code was received; status_code is 0.
    """

    code = "network_error"
    message = "Network error"
    status_code = 0


STATUS_CODE_MAP: dict[int, type[ConsoleError]] = {
    400: ValidationError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitedError,
}

ERROR_CODE_MAP: dict[str, type[ConsoleError]] = {
    "validation_error": ValidationError,
    "unauthorized": UnauthorizedError,
    "forbidden": ForbiddenError,
    "not_found": NotFoundError,
    "conflict": ConflictError,
    "rate_limited": RateLimitedError,
    "server_error": ServerError,
}


def _error_class_for(status_code: int, code: str | None) -> type[ConsoleError]:
    if status_code in STATUS_CODE_MAP:
        return STATUS_CODE_MAP[status_code]
    if code and code in ERROR_CODE_MAP:
        return ERROR_CODE_MAP[code]
    if status_code >= 500:
        return ServerError
    return ConsoleError


def raise_for_error_response(
    status_code: int,
    response_body: dict[str, Any],
) -> None:
    """Raise the ConsoleError matching an error response.

    The gateway answers failures with ``{"error": "message"}``. A structured
    ``{"error": {"code", "message", "details"}}`` body is accepted as well.

    Args:
        status_code: HTTP status code
        response_body: Parsed JSON response body

    Raises:
        ConsoleError: Subclass chosen by status code, then by error code
    """
    error_data = response_body.get("error")
    code: str | None = None
    message: str | None = None
    details: dict[str, Any] = {}

    if isinstance(error_data, str):
        message = error_data or None
    elif isinstance(error_data, dict):
        code = error_data.get("code")
        message = error_data.get("message") or None
        details = error_data.get("details") or {}

    error_class = _error_class_for(status_code, code)
    error = error_class(message=message, details=details)
    error.status_code = status_code
    raise error
