"""HTTP adapters for melcloud.

This package provides the authenticated MELCloud session, its login
procedure and the URL builders for the read endpoints.
"""

from .auth import Credentials, LoginRequest, LoginResponse, login
from .client import CONTEXT_KEY_HEADER, MelcloudSession
from .errors import (
    AuthenticationError,
    MelcloudError,
    ProtocolError,
    ReauthenticationError,
    SessionExpiredError,
    TransportError,
)
from .queries import build_device_info_query, build_device_list_query

__all__ = [
    "AuthenticationError",
    "CONTEXT_KEY_HEADER",
    "Credentials",
    "LoginRequest",
    "LoginResponse",
    "MelcloudError",
    "MelcloudSession",
    "ProtocolError",
    "ReauthenticationError",
    "SessionExpiredError",
    "TransportError",
    "build_device_info_query",
    "build_device_list_query",
    "login",
]
