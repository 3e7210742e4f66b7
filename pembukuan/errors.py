"""API error types.

Each error carries the HTTP status it maps to and the fields of the error
envelope (``error``, optional ``message`` and ``errors``). The handlers in
``pembukuan.main`` turn them into responses.
"""

from typing import List, Optional


class ApiError(Exception):
    """Base class for errors that are reported to the client."""

    status_code = 500
    default_error = "An unexpected error occurred. Please try again."

    def __init__(self, error: Optional[str] = None, message: Optional[str] = None, errors: Optional[List] = None):
        self.error = error or self.default_error
        self.message = message
        self.errors = errors
        super().__init__(self.error)

    def to_dict(self) -> dict:
        body = {"code": self.status_code, "error": self.error}
        if self.message is not None:
            body["message"] = self.message
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class AuthError(ApiError):
    """Missing, malformed, badly signed or expired bearer credential."""

    status_code = 401
    default_error = "Invalid or Expired Token"


class ValidationError(ApiError):
    """Missing or malformed field; reports the first violated rule."""

    status_code = 400
    default_error = "Validation error"


class ConflictError(ApiError):
    """Duplicate unique key, such as an account code or reference number."""

    status_code = 409
    default_error = "Conflict"


class NotFoundError(ApiError):
    status_code = 404
    default_error = "Not found"
