"""
Application error classes.

Operational errors carry an HTTP status code so the API layer can render them
without knowing where they were raised.
"""

from datetime import UTC, datetime
from typing import Any


class AppError(Exception):
    """
    Base application error.

    Attributes:
        message: Human-readable message
        status_code: HTTP status code for the client response
        is_operational: Expected failure (bad input, missing row) vs a bug
        details: Optional structured details for the client
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        is_operational: bool = True,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.is_operational = is_operational
        self.details = details


class ValidationError(AppError):
    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, 400, True, details)


class NotFoundError(AppError):
    def __init__(self, message: str = "Resource not found") -> None:
        super().__init__(message, 404, True)


class UnauthorizedError(AppError):
    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message, 401, True)


class ForbiddenError(AppError):
    def __init__(self, message: str = "Forbidden") -> None:
        super().__init__(message, 403, True)


class ConflictError(AppError):
    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message, 409, True, details)


class RateLimitError(AppError):
    def __init__(self, message: str = "Too many requests") -> None:
        super().__init__(message, 429, True)


def format_error_response(
    error: Exception,
    path: str | None = None,
    request_id: str | None = None,
) -> dict[str, Any]:
    """
    Build the client-facing error body.

    Non-AppError exceptions are reported as 500 without details.

    Returns:
        {"success": False, "error": {...}}
    """
    is_app_error = isinstance(error, AppError)
    body: dict[str, Any] = {
        "message": str(error),
        "code": type(error).__name__,
        "statusCode": error.status_code if is_app_error else 500,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if is_app_error and error.details is not None:
        body["details"] = error.details
    if path is not None:
        body["path"] = path
    if request_id is not None:
        body["requestId"] = request_id

    return {"success": False, "error": body}
