"""Canonical error types for the client.

Every failure the request executor surfaces is an ApiError. The substitute
backend raises SubstituteError so callers can still catch a single type.
"""

from typing import Any, Optional

# === Error codes ===
HTTP_ERROR = "HTTP_ERROR"
REQUEST_FAILED = "REQUEST_FAILED"
NETWORK_ERROR = "NETWORK_ERROR"
UPLOAD_ERROR = "UPLOAD_ERROR"
UPLOAD_FAILED = "UPLOAD_FAILED"

# Substitute backend codes
NOT_FOUND = "NOT_FOUND"
VALIDATION_ERROR = "VALIDATION_ERROR"


class ApiError(Exception):
    """A failed API call, with or without an HTTP response.

    Attributes:
        message: Human-readable description, safe to show to users.
        code: Symbolic error code (one of the constants above or server supplied).
        status_code: HTTP status, 0 when no response was received.
        details: Optional opaque payload supplied by the server.
    """

    def __init__(self, message: str, status_code: int = 0, code: str = HTTP_ERROR, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details

    @property
    def is_network_error(self) -> bool:
        return self.status_code == 0

    def to_dict(self) -> dict:
        return {
            "message": self.message,
            "code": self.code,
            "status_code": self.status_code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"ApiError(status_code={self.status_code}, code={self.code!r}, message={self.message!r})"


class SubstituteError(ApiError):
    """Raised by the in-memory substitute services."""

    def __init__(self, message: str, code: str, status_code: int = 0, details: Optional[Any] = None):
        super().__init__(message, status_code=status_code, code=code, details=details)


def not_found(resource: str, resource_id: str) -> SubstituteError:
    return SubstituteError(f"{resource} with id '{resource_id}' was not found.", NOT_FOUND, status_code=404)
