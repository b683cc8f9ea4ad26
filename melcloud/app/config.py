"""Configuration utilities for melcloud.

Settings come from an optional JSON file, overridden by ``MELCLOUD_*``
environment variables. Only the credentials are mandatory.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping

from melcloud.infrastructure.http.auth import DEFAULT_TIMEOUT

ENV_PREFIX = "MELCLOUD_"


class ConfigError(ValueError):
    """Raised when the configuration is incomplete or malformed."""


def load_config(path: str) -> Dict[str, Any]:
    """Load configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A dictionary of configuration values.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"{path}: invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a JSON object at the top level")
    return data


@dataclass(frozen=True)
class MelcloudSettings:
    email: str
    password: str = field(repr=False)
    timeout: float = DEFAULT_TIMEOUT
    max_reauth_attempts: int = 1


def _coerce(name: str, value: Any, kind: type) -> Any:
    if value is None or value == "":
        return None
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from exc


def load_settings(
    path: str | None = None,
    environ: Mapping[str, str] | None = None,
    **overrides: Any,
) -> MelcloudSettings:
    """Build :class:`MelcloudSettings` from file, environment and overrides.

    Later sources win: JSON file, then ``MELCLOUD_EMAIL``/``MELCLOUD_PASSWORD``/
    ``MELCLOUD_TIMEOUT``/``MELCLOUD_MAX_REAUTH_ATTEMPTS``, then keyword
    overrides whose value is not ``None``.
    """
    env = os.environ if environ is None else environ
    values: dict[str, Any] = load_config(path) if path else {}

    for key in ("email", "password", "timeout", "max_reauth_attempts"):
        env_value = env.get(ENV_PREFIX + key.upper())
        if env_value:
            values[key] = env_value
    values.update({k: v for k, v in overrides.items() if v is not None})

    email = values.get("email")
    password = values.get("password")
    if not email or not password:
        raise ConfigError(
            "MELCloud credentials missing: set email and password in the "
            "config file or via MELCLOUD_EMAIL/MELCLOUD_PASSWORD"
        )

    timeout = _coerce("timeout", values.get("timeout"), float)
    if timeout is None:
        timeout = DEFAULT_TIMEOUT
    elif timeout <= 0:
        raise ConfigError("timeout must be a positive number of seconds")
    attempts = _coerce(
        "max_reauth_attempts", values.get("max_reauth_attempts", 1), int)
    if attempts is None or attempts < 0:
        raise ConfigError("max_reauth_attempts must be zero or positive")

    return MelcloudSettings(
        email=str(email),
        password=str(password),
        timeout=timeout,
        max_reauth_attempts=attempts,
    )


__all__ = ["ConfigError", "MelcloudSettings", "load_config", "load_settings"]
