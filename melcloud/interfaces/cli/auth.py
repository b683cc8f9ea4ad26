"""CLI helpers for constructing authenticated MELCloud sessions."""

from __future__ import annotations

import click
import requests

from melcloud.app.config import ConfigError, MelcloudSettings, load_settings
from melcloud.infrastructure.http import MelcloudSession


def resolve_settings(
    *,
    config_path: str | None,
    email: str | None,
    password: str | None,
    timeout: float | None,
) -> MelcloudSettings:
    """Return settings from config/environment, prompting for a missing password.

    Raises:
        click.UsageError: If no email address is configured anywhere.
    """
    try:
        return load_settings(
            config_path, email=email, password=password, timeout=timeout)
    except ConfigError as exc:
        if password is not None:
            raise click.UsageError(str(exc)) from exc
        # Only the password may be prompted for; anything else is fatal.
        try:
            partial = load_settings(
                config_path, email=email, password="-", timeout=timeout)
        except ConfigError:
            raise click.UsageError(str(exc)) from exc
        prompted = click.prompt("MELCloud password", hide_input=True)
        return load_settings(
            config_path, email=partial.email, password=prompted, timeout=timeout)


def build_session(
    settings: MelcloudSettings,
    *,
    transport: requests.Session | None = None,
) -> MelcloudSession:
    """Log in with ``settings`` and return the resulting session."""
    return MelcloudSession.authenticate(
        settings.email,
        settings.password,
        transport=transport,
        timeout=settings.timeout,
        max_reauth_attempts=settings.max_reauth_attempts,
    )
