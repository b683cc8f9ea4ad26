"""Endpoint URLs and query builders for the MELCloud read API."""

from __future__ import annotations

from urllib.parse import urlencode, urlsplit, urlunsplit

BASE_URL = "https://app.melcloud.com/Mitsubishi.Wifi.Client"
LOGIN_URL = f"{BASE_URL}/Login/ClientLogin"
DEVICE_INFO_URL = f"{BASE_URL}/Device/Get"
DEVICE_LIST_URL = f"{BASE_URL}/User/ListDevices"


def _build_url(base: str, params: dict[str, str] | None = None) -> str:
    parts = urlsplit(base)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ValueError(f"Malformed MELCloud endpoint URL: {base!r}")
    query = urlencode(params) if params else parts.query
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, ""))


def build_device_info_query(
    device_id: str, building_id: str, *, base_url: str = DEVICE_INFO_URL
) -> str:
    """Return the device-info URL for ``device_id`` in ``building_id``."""
    return _build_url(base_url, {"id": str(device_id), "buildingID": str(building_id)})


def build_device_list_query(*, base_url: str = DEVICE_LIST_URL) -> str:
    """Return the device-list URL. The endpoint takes no parameters."""
    return _build_url(base_url)


__all__ = [
    "BASE_URL",
    "DEVICE_INFO_URL",
    "DEVICE_LIST_URL",
    "LOGIN_URL",
    "build_device_info_query",
    "build_device_list_query",
]
