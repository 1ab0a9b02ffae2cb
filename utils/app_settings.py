"""Application settings for the vehicle admin console.

Values come from environment variables first and then from an optional
INI file at ``data/app.ini`` (section ``[vehicles]``).  The data directory
can be moved with ``VEHICLE_ADMIN_DATA_DIR``.  Anything left unspecified
falls back to the defaults below.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, TypeVar


T = TypeVar("T")

DEFAULT_API_BASE_URL = "http://localhost:8000/api/v1/bajaj"
DEFAULT_API_TIMEOUT = 10.0
DEFAULT_DEBOUNCE_MS = 500
DEFAULT_PAGE_SIZE = 5

_INI_SECTION = "vehicles"

# setting name -> environment variable
_ENV_KEYS: dict[str, str] = {
    "api_base_url": "VEHICLE_API_BASE_URL",
    "api_timeout": "VEHICLE_API_TIMEOUT",
    "debounce_ms": "VEHICLE_SEARCH_DEBOUNCE_MS",
    "page_size": "VEHICLE_PAGE_SIZE",
    "discard_stale": "VEHICLE_DISCARD_STALE",
    "username": "VEHICLE_ADMIN_USERNAME",
    "password": "VEHICLE_ADMIN_PASSWORD",
    "log_level": "VEHICLE_ADMIN_LOG_LEVEL",
}


class ConfigurationError(RuntimeError):
    """Raised when a configured value cannot be used."""


@dataclass(frozen=True)
class VehicleAdminSettings:
    api_base_url: str = DEFAULT_API_BASE_URL
    api_timeout: float = DEFAULT_API_TIMEOUT
    debounce_ms: int = DEFAULT_DEBOUNCE_MS
    page_size: int = DEFAULT_PAGE_SIZE
    discard_stale: bool = False
    username: str = "admin"
    password: str = "123456"
    log_level: str = "INFO"


def _data_dir() -> Path:
    return Path(os.environ.get("VEHICLE_ADMIN_DATA_DIR", "data"))


def _read_ini(path: Optional[Path] = None) -> dict[str, str]:
    """Return the ``[vehicles]`` section of ``app.ini`` as a plain dict."""

    ini_path = path or (_data_dir() / "app.ini")
    if not ini_path.exists():
        return {}
    cp = configparser.ConfigParser()
    cp.read(ini_path)
    if not cp.has_section(_INI_SECTION):
        return {}
    return {key: value for key, value in cp.items(_INI_SECTION)}


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _convert(name: str, raw: str, convert: Callable[[str], T]) -> T:
    try:
        return convert(raw.strip())
    except ValueError as exc:
        raise ConfigurationError(f"Invalid value for {name}: {raw!r}") from exc


def load_settings(ini_path: Optional[Path] = None) -> VehicleAdminSettings:
    """Resolve settings from the environment and the INI file."""

    values = _read_ini(ini_path)
    for name, env_key in _ENV_KEYS.items():
        env_value = os.environ.get(env_key)
        if env_value is not None:
            values[name] = env_value

    defaults = VehicleAdminSettings()
    base_url = values.get("api_base_url", defaults.api_base_url).strip().rstrip("/")
    if not base_url:
        raise ConfigurationError("api_base_url must not be blank")

    page_size = _convert("page_size", values.get("page_size", str(defaults.page_size)), int)
    if page_size < 1:
        raise ConfigurationError("page_size must be at least 1")

    return VehicleAdminSettings(
        api_base_url=base_url,
        api_timeout=_convert("api_timeout", values.get("api_timeout", str(defaults.api_timeout)), float),
        debounce_ms=_convert("debounce_ms", values.get("debounce_ms", str(defaults.debounce_ms)), int),
        page_size=page_size,
        discard_stale=_parse_bool(values.get("discard_stale", "0")),
        username=values.get("username", defaults.username),
        password=values.get("password", defaults.password),
        log_level=values.get("log_level", defaults.log_level).strip().upper() or defaults.log_level,
    )


__all__ = [
    "ConfigurationError",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_DEBOUNCE_MS",
    "DEFAULT_PAGE_SIZE",
    "VehicleAdminSettings",
    "load_settings",
]
