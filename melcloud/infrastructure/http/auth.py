"""Login procedure for MELCloud.

The login endpoint accepts a JSON document describing the client and the
account credentials and answers with either a ``LoginData.ContextKey`` (the
session token) or an ``ErrorId``. This module owns that exchange; retrying
on expired sessions is the job of :class:`~melcloud.infrastructure.http.client.MelcloudSession`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

import requests

from .errors import AuthenticationError, ProtocolError, TransportError
from .queries import LOGIN_URL

APP_VERSION = "1.21.6.0"
LANGUAGE_CODE = 19
DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class Credentials:
    """Account credentials retained for reauthentication."""

    email: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class LoginRequest:
    """Body posted to the login endpoint."""

    email: str
    password: str = field(repr=False)
    app_version: str = APP_VERSION
    language: int = LANGUAGE_CODE
    persist: bool = True

    @classmethod
    def from_credentials(cls, credentials: Credentials) -> "LoginRequest":
        return cls(email=credentials.email, password=credentials.password)

    def to_json(self) -> dict[str, Any]:
        return {
            "AppVersion": self.app_version,
            "CaptchaResponse": None,
            "Email": self.email,
            "Password": self.password,
            "Language": self.language,
            "Persist": self.persist,
        }


@dataclass(frozen=True)
class LoginResponse:
    """Decoded login answer: exactly one of ``context_key`` or ``error_id``."""

    context_key: str | None = None
    error_id: int | None = None

    def __post_init__(self) -> None:
        if (self.context_key is None) == (self.error_id is None):
            raise ProtocolError(
                "Login response must carry either a context key or an error id",
                operation="login",
            )

    @classmethod
    def from_json(cls, payload: Any) -> "LoginResponse":
        if not isinstance(payload, dict):
            raise ProtocolError(
                f"Unexpected login response of type {type(payload).__name__}",
                operation="login",
            )
        error_id = payload.get("ErrorId")
        if error_id is not None:
            if isinstance(error_id, bool) or not isinstance(error_id, int):
                raise ProtocolError(
                    f"Unexpected ErrorId in login response: {error_id!r}",
                    operation="login",
                )
            return cls(error_id=error_id)

        login_data = payload.get("LoginData")
        context_key = login_data.get("ContextKey") if isinstance(
            login_data, dict) else None
        if not isinstance(context_key, str) or not context_key:
            raise ProtocolError(
                "Login response carries neither an ErrorId nor a ContextKey",
                operation="login",
            )
        return cls(context_key=context_key)


def login(
    credentials: Credentials,
    *,
    transport: requests.Session,
    timeout: float | None = DEFAULT_TIMEOUT,
    logger: logging.Logger,
    login_url: str = LOGIN_URL,
) -> str:
    """Log in with ``credentials`` and return the session context key.

    Raises:
        TransportError: If the login request could not be sent.
        ProtocolError: If the response body cannot be decoded.
        AuthenticationError: If MELCloud rejects the credentials.
    """
    logger.info("Authenticating with MELCloud...")
    payload = LoginRequest.from_credentials(credentials).to_json()
    try:
        response = transport.request(
            "POST", login_url, json=payload, timeout=timeout)
    except requests.RequestException as exc:
        logger.error(f"Unable to authenticate with MELCloud: {exc}")
        raise TransportError(
            f"Unable to authenticate with MELCloud: {exc}", operation="login"
        ) from exc

    try:
        logger.debug(
            f"Received MELCloud login response with status {response.status_code}"
        )
        try:
            body = response.json()
        except ValueError as exc:
            logger.error(f"Unable to decode MELCloud login response: {exc}")
            raise ProtocolError(
                f"Unable to decode MELCloud login response: {exc}",
                operation="login",
            ) from exc
    finally:
        response.close()

    decoded = LoginResponse.from_json(body)
    if decoded.error_id is not None:
        logger.error(
            f"MELCloud rejected the login (error id {decoded.error_id})")
        raise AuthenticationError(
            "Unable to sign in to MELCloud, maybe your credentials are "
            f"incorrect? (err: {decoded.error_id})",
            error_code=decoded.error_id,
            operation="login",
        )

    logger.info("Successfully authenticated with MELCloud")
    return decoded.context_key  # type: ignore[return-value]


__all__ = [
    "APP_VERSION",
    "Credentials",
    "DEFAULT_TIMEOUT",
    "LANGUAGE_CODE",
    "LoginRequest",
    "LoginResponse",
    "login",
]
