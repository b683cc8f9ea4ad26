"""Scripted transport and response builders shared by the tests."""

from __future__ import annotations

import io
import json
import threading
from typing import Any

from requests import Response

from melcloud.infrastructure.http.queries import LOGIN_URL


class RecordingResponse(Response):
    """Response that remembers whether ``close()`` was called."""

    def __init__(self) -> None:
        super().__init__()
        self.closed = False

    def close(self) -> None:
        self.closed = True
        super().close()


def make_response(
    status: int = 200, payload: Any = None, text: str | None = None
) -> RecordingResponse:
    body = text if text is not None else json.dumps(payload)
    resp = RecordingResponse()
    resp.status_code = status
    resp._content = body.encode("utf-8")
    resp.raw = io.BytesIO(resp._content)
    resp.encoding = "utf-8"
    resp.headers["Content-Type"] = "application/json"
    return resp


def login_ok(context_key: str) -> Response:
    return make_response(200, {"ErrorId": None, "LoginData": {"ContextKey": context_key}})


def login_rejected(error_id: int = 1) -> Response:
    return make_response(200, {"ErrorId": error_id, "LoginData": None})


class FakeTransport:
    """Stand-in for ``requests.Session`` that replays scripted answers.

    ``responses`` items are a :class:`Response`, an exception to raise, or a
    callable taking the recorded call and returning either.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []
        self.closed = False
        self._lock = threading.Lock()

    def request(self, method: str, url: str, **kwargs: Any) -> Response:
        call = {"method": method, "url": url, **kwargs}
        with self._lock:
            self.calls.append(call)
            item = self.responses.pop(0)
        if callable(item) and not isinstance(item, Response):
            item = item(call)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True

    @property
    def login_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["url"] == LOGIN_URL]

    @property
    def api_calls(self) -> list[dict[str, Any]]:
        return [c for c in self.calls if c["url"] != LOGIN_URL]
