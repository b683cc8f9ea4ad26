"""
melcloud package initializer.

This package provides a credential-scoped client for the MELCloud
device-control API: log in once, reuse the session token and renew it
transparently when MELCloud expires it.

The package exposes a ``__version__`` attribute read from the installed
distribution metadata.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("melcloud-client")
except PackageNotFoundError:
    # Package is not installed (running from source without pip install -e .)
    __version__ = "0.0.0.dev"

from melcloud.infrastructure.http import (  # noqa: E402
    AuthenticationError,
    Credentials,
    MelcloudError,
    MelcloudSession,
    ProtocolError,
    ReauthenticationError,
    SessionExpiredError,
    TransportError,
)

__all__: list[str] = [
    "AuthenticationError",
    "Credentials",
    "MelcloudError",
    "MelcloudSession",
    "ProtocolError",
    "ReauthenticationError",
    "SessionExpiredError",
    "TransportError",
    "__version__",
]
