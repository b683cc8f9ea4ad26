"""Shared wiring for CLI commands.

The root command stores a :class:`CLIContext` on ``ctx.obj``; subcommands use
it to open an authenticated session. Tests inject a fake transport through
``transport_factory``.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator

import requests

from melcloud.infrastructure.http import MelcloudSession

from .auth import build_session, resolve_settings


@dataclass
class CLIContext:
    """Container for CLI options and the transport factory."""

    config_path: str | None = None
    email: str | None = None
    password: str | None = None
    timeout: float | None = None
    transport_factory: Callable[[], requests.Session] = field(
        default=requests.Session)

    @contextmanager
    def session(self) -> Iterator[MelcloudSession]:
        """Yield a logged-in session and close its transport afterwards."""
        settings = resolve_settings(
            config_path=self.config_path,
            email=self.email,
            password=self.password,
            timeout=self.timeout,
        )
        transport = self.transport_factory()
        try:
            session = build_session(settings, transport=transport)
        except BaseException:
            transport.close()
            raise
        with session:
            yield session
