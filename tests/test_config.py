from __future__ import annotations

import json

import pytest

from melcloud.app.config import ConfigError, load_config, load_settings


def _write(tmp_path, payload) -> str:
    path = tmp_path / "melcloud.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return str(path)


def test_load_config_reads_json(tmp_path) -> None:
    path = _write(tmp_path, {"email": "a@b.c"})
    assert load_config(path) == {"email": "a@b.c"}


def test_load_config_rejects_non_object(tmp_path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, ["email"]))


def test_settings_defaults_from_file(tmp_path) -> None:
    path = _write(tmp_path, {"email": "a@b.c", "password": "pw"})

    settings = load_settings(path, environ={})

    assert settings.email == "a@b.c"
    assert settings.password == "pw"
    assert settings.timeout == 30.0
    assert settings.max_reauth_attempts == 1
    assert "pw" not in repr(settings)


def test_environment_overrides_file(tmp_path) -> None:
    path = _write(tmp_path, {"email": "file@b.c", "password": "pw", "timeout": 5})
    environ = {
        "MELCLOUD_EMAIL": "env@b.c",
        "MELCLOUD_TIMEOUT": "12.5",
        "MELCLOUD_MAX_REAUTH_ATTEMPTS": "3",
    }

    settings = load_settings(path, environ=environ)

    assert settings.email == "env@b.c"
    assert settings.password == "pw"
    assert settings.timeout == 12.5
    assert settings.max_reauth_attempts == 3


def test_explicit_overrides_win() -> None:
    environ = {"MELCLOUD_EMAIL": "env@b.c", "MELCLOUD_PASSWORD": "pw"}

    settings = load_settings(environ=environ, email="cli@b.c", timeout=None)

    assert settings.email == "cli@b.c"
    assert settings.timeout == 30.0


def test_missing_credentials_raise_config_error() -> None:
    with pytest.raises(ConfigError):
        load_settings(environ={"MELCLOUD_EMAIL": "a@b.c"})


@pytest.mark.parametrize(
    "environ",
    [
        {"MELCLOUD_TIMEOUT": "soon"},
        {"MELCLOUD_MAX_REAUTH_ATTEMPTS": "-1"},
    ],
)
def test_invalid_numbers_raise_config_error(environ) -> None:
    environ = {"MELCLOUD_EMAIL": "a@b.c", "MELCLOUD_PASSWORD": "pw", **environ}
    with pytest.raises(ConfigError):
        load_settings(environ=environ)


def test_invalid_json_raises_config_error(tmp_path) -> None:
    path = tmp_path / "melcloud.json"
    path.write_text('{"email": "a@b.c",', encoding="utf-8")

    with pytest.raises(ConfigError, match="invalid JSON"):
        load_config(str(path))


@pytest.mark.parametrize("timeout", [None, ""])
def test_blank_timeout_falls_back_to_default(tmp_path, timeout) -> None:
    path = _write(tmp_path, {"email": "a@b.c", "password": "pw", "timeout": timeout})

    assert load_settings(path, environ={}).timeout == 30.0


@pytest.mark.parametrize("timeout", [0, -5])
def test_non_positive_timeout_raises_config_error(tmp_path, timeout) -> None:
    path = _write(tmp_path, {"email": "a@b.c", "password": "pw", "timeout": timeout})

    with pytest.raises(ConfigError):
        load_settings(path, environ={})
