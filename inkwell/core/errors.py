"""
Exception taxonomy shared by the backend layer, the services and the API.

Every error carries a user-facing ``message`` and the HTTP ``status_code`` the
API layer answers with. Remote failures keep the platform's error ``code``.
"""

from __future__ import annotations

from typing import Any, Optional


class InkwellError(Exception):
    """Base class for all errors raised by Inkwell."""

    status_code: int = 500

    def __init__(self, message: str, *, code: Optional[str] = None, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"detail": self.message, "error_type": type(self).__name__}
        if self.code:
            body["code"] = self.code
        if self.details is not None:
            body["details"] = self.details
        return body


class BackendError(InkwellError):
    """The backend-as-a-service rejected or failed a call."""

    status_code = 502


class BackendUnavailableError(InkwellError):
    """The shared backend client has not been created."""

    status_code = 503


class AuthenticationError(InkwellError):
    status_code = 401


class PermissionDeniedError(InkwellError):
    status_code = 403


class NotFoundError(InkwellError):
    status_code = 404


class ConflictError(InkwellError):
    status_code = 409


class ValidationError(InkwellError):
    status_code = 422
