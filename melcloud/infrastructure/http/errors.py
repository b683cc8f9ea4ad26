"""Exceptions raised by the MELCloud HTTP client.

Every error carries the ``operation`` that failed (``"login"``,
``"device list"``, ``"device info"`` or ``"reauthentication"``) so callers can
tell a rejected login apart from a device query that lost its session.
"""

from __future__ import annotations


class MelcloudError(Exception):
    """Base class for all MELCloud client failures."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        message = super().__str__()
        if self.operation:
            return f"{self.operation}: {message}"
        return message


class TransportError(MelcloudError):
    """Raised when the request never produced an HTTP response."""


class ProtocolError(MelcloudError):
    """Raised when a response body does not have the expected shape."""


class AuthenticationError(MelcloudError):
    """Raised when MELCloud rejects the supplied credentials.

    ``error_code`` is the ``ErrorId`` returned by the service.
    """

    def __init__(
        self,
        message: str,
        *,
        error_code: int | None = None,
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.error_code = error_code


class ReauthenticationError(MelcloudError):
    """Raised when an expired session could not be renewed.

    The failure of the underlying login is available as ``__cause__``.
    """


class SessionExpiredError(ReauthenticationError):
    """Raised when the service keeps rejecting freshly issued tokens."""


__all__ = [
    "AuthenticationError",
    "MelcloudError",
    "ProtocolError",
    "ReauthenticationError",
    "SessionExpiredError",
    "TransportError",
]
