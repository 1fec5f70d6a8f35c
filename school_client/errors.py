"""
Exception types shared by services and UI.

Every user-facing failure is one of these; the UI shows `error_message(exc, fallback)`
in a blocking alert and leaves the screen state as it was.
"""

from __future__ import annotations

from typing import Any


class SchoolClientError(RuntimeError):
    """Base class for errors the UI reports to the user."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.original = original


class ApiError(SchoolClientError):
    """A request failed: transport error or non-2xx response."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        payload: Any = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message, original=original)
        self.status_code = status_code
        self.payload = payload


class AuthError(ApiError):
    """Login rejected by the server or signed in under the wrong role."""


class ValidationError(SchoolClientError):
    """Form input rejected before any request is sent."""


class PermissionDeniedError(SchoolClientError):
    """The signed-in role may not perform the action."""


def error_message(exc: BaseException, fallback: str = "Something went wrong.") -> str:
    """User-facing text for an exception raised by a service call."""
    if isinstance(exc, SchoolClientError) and exc.message:
        return exc.message
    return fallback
