"""Authenticated HTTP session for the MELCloud API.

:class:`MelcloudSession` logs in once, keeps the resulting context key and
attaches it to every request. When MELCloud answers ``401`` the session logs
in again with the stored credentials and retries the request, at most
``max_reauth_attempts`` times per call. Token renewal is single-flight: when
several threads hit an expired token at once only the first logs in, the
others pick up its token or its failure.
"""

from __future__ import annotations

import logging
import threading
from typing import Any

import requests
from requests import Response

from melcloud.infrastructure.observability.logging import get_logger, log_context

from .auth import DEFAULT_TIMEOUT, Credentials, login
from .errors import (
    MelcloudError,
    ReauthenticationError,
    SessionExpiredError,
    TransportError,
)
from .queries import build_device_info_query, build_device_list_query

CONTEXT_KEY_HEADER = "X-MitsContextKey"


class MelcloudSession:
    """Credential-scoped MELCloud client with self-healing sessions."""

    def __init__(
        self,
        credentials: Credentials,
        token: str,
        *,
        transport: requests.Session | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
        max_reauth_attempts: int = 1,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_reauth_attempts < 0:
            raise ValueError("max_reauth_attempts must be zero or positive")
        self.credentials = credentials
        self.transport = transport or requests.Session()
        self.timeout = timeout
        self.max_reauth_attempts = max_reauth_attempts
        self.logger = logger or get_logger(__name__)
        self._token = token
        self._generation = 0
        self._last_failure: ReauthenticationError | None = None
        self._token_lock = threading.Lock()
        self._reauth_lock = threading.Lock()

    @classmethod
    def authenticate(
        cls,
        email: str,
        password: str,
        *,
        transport: requests.Session | None = None,
        timeout: float | None = DEFAULT_TIMEOUT,
        max_reauth_attempts: int = 1,
        logger: logging.Logger | None = None,
    ) -> "MelcloudSession":
        """Log in and return a session holding the issued context key.

        Raises:
            TransportError, ProtocolError, AuthenticationError: See
                :func:`~melcloud.infrastructure.http.auth.login`.
        """
        credentials = Credentials(email=email, password=password)
        transport = transport or requests.Session()
        logger = logger or get_logger(__name__)
        token = login(credentials, transport=transport,
                      timeout=timeout, logger=logger)
        return cls(
            credentials,
            token,
            transport=transport,
            timeout=timeout,
            max_reauth_attempts=max_reauth_attempts,
            logger=logger,
        )

    # -------------------- token handling --------------------
    @property
    def token(self) -> str:
        with self._token_lock:
            return self._token

    def _snapshot(self) -> tuple[str, int]:
        with self._token_lock:
            return self._token, self._generation

    def reauthenticate(self) -> str:
        """Log in again with the stored credentials and adopt the new token.

        Raises:
            ReauthenticationError: If the login fails for any reason; the
                original error is chained as ``__cause__``.
        """
        with self._reauth_lock:
            return self._reauthenticate_locked()

    def _reauthenticate_locked(self) -> str:
        # Every attempt ends a generation, whether it succeeds or fails.
        try:
            token = login(
                self.credentials,
                transport=self.transport,
                timeout=self.timeout,
                logger=self.logger,
            )
        except MelcloudError as exc:
            self.logger.error(f"Reauthentication failed: {exc}")
            failure = ReauthenticationError(
                f"Unable to renew the MELCloud session: {exc}",
                operation="reauthentication",
            )
            with self._token_lock:
                self._generation += 1
                self._last_failure = failure
            raise failure from exc
        with self._token_lock:
            self._token = token
            self._generation += 1
            self._last_failure = None
        return token

    def _renew_token(self, seen_generation: int) -> str:
        """Renew the token once for all requests rejected in ``seen_generation``.

        Requests that were sent before another thread finished a renewal reuse
        its outcome: the new token, or the same failure.
        """
        with self._reauth_lock:
            with self._token_lock:
                generation = self._generation
                current = self._token
                failure = self._last_failure
            if generation == seen_generation:
                return self._reauthenticate_locked()
            if failure is not None:
                self.logger.debug(
                    "Reusing the failed reauthentication of another request")
                raise ReauthenticationError(
                    str(failure.args[0]), operation=failure.operation
                ) from failure.__cause__
            self.logger.debug(
                "Session token already renewed by another request")
            return current

    # -------------------- request helpers --------------------
    def _send(
        self,
        method: str,
        url: str,
        token: str,
        headers: dict[str, str],
        operation: str,
        **kwargs: Any,
    ) -> Response:
        request_headers = dict(headers)
        request_headers[CONTEXT_KEY_HEADER] = token
        request_headers["Accept"] = "application/json"
        try:
            return self.transport.request(
                method, url, headers=request_headers, **kwargs)
        except requests.RequestException as exc:
            self.logger.error(f"MELCloud request failed: {exc}")
            raise TransportError(
                f"MELCloud request failed: {exc}", operation=operation
            ) from exc

    def execute_authenticated(
        self,
        method: str,
        url: str,
        *,
        operation: str = "request",
        **kwargs: Any,
    ) -> Response:
        """Send ``method url`` with the session token attached.

        A ``401`` closes the response, renews the token and resends the same
        request. Every other status is returned untouched as a streamed
        :class:`requests.Response` which the caller must close.

        Raises:
            TransportError: If the request could not be sent.
            ReauthenticationError: If renewing the token failed.
            SessionExpiredError: If the service still answers ``401`` after
                ``max_reauth_attempts`` renewals.
        """
        headers = dict(kwargs.pop("headers", None) or {})
        kwargs.setdefault("timeout", self.timeout)
        kwargs.setdefault("stream", True)

        attempts = 0
        while True:
            token, generation = self._snapshot()
            response = self._send(method, url, token,
                                  headers, operation, **kwargs)
            if response.status_code != requests.codes.unauthorized:
                return response

            response.close()
            if attempts >= self.max_reauth_attempts:
                self.logger.error(
                    f"MELCloud rejected the session after {attempts} reauthentication(s)"
                )
                raise SessionExpiredError(
                    f"Session still rejected after {attempts} reauthentication(s)",
                    operation=operation,
                )
            attempts += 1
            self.logger.warning("Performing MELCloud reauthentication")
            self._renew_token(generation)

    # -------------------- read operations --------------------
    def get_device_list(self) -> Response:
        """Return the streamed response of the device-list endpoint."""
        url = build_device_list_query()
        with log_context(operation="device list"):
            self.logger.debug(f"Requesting device list from MELCloud ({url})")
            response = self.execute_authenticated(
                "GET", url, operation="device list")
            self.logger.debug(
                f"Received response from MELCloud with status {response.status_code}"
            )
        return response

    def get_device_information(self, device_id: str, building_id: str) -> Response:
        """Return the streamed response of the device-info endpoint."""
        url = build_device_info_query(device_id, building_id)
        with log_context(
            operation="device info", device_id=device_id, building_id=building_id
        ):
            self.logger.debug(f"Requesting device info from MELCloud ({url})")
            response = self.execute_authenticated(
                "GET", url, operation="device info")
            self.logger.debug(
                f"Received response from MELCloud with status {response.status_code}"
            )
        return response

    # -------------------- lifecycle --------------------
    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "MelcloudSession":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


__all__ = ["CONTEXT_KEY_HEADER", "MelcloudSession"]
