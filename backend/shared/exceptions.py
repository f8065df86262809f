"""Exceptions for the match-and-notify pipeline.

Each error carries the HTTP status the endpoint answers with. Every failure
is terminal for the invocation: nothing is retried or queued.
"""

from __future__ import annotations

from typing import Any


class NotificationError(Exception):
    """Base exception for notification pipeline errors."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        """Initialize the exception.

        Args:
            message: Error message returned to the caller.
        """
        self.message = message
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        return {"error": self.message}


class InvalidRequest(NotificationError):
    """Raised when the request payload is missing required fields."""

    status_code = 400


class ConfigurationMissing(NotificationError):
    """Raised when a required secret or endpoint is not configured."""


class UpstreamFailure(NotificationError):
    """Raised when the item store or identity provider returns an error."""


class DispatchFailure(NotificationError):
    """Raised when the email provider rejects or fails the send.

    The provider's diagnostic text is kept in ``details`` and returned to
    the caller unchanged.
    """

    status_code = 502

    def __init__(self, message: str, details: Any = None) -> None:
        self.details = details
        super().__init__(message)

    def to_response(self) -> dict[str, Any]:
        return {"error": self.message, "details": self.details}


class UnexpectedError(NotificationError):
    """Catch-all for failures outside the taxonomy above."""

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(message)
