"""
Environment-backed settings.

Every value is read on call so tests can override it with monkeypatch.setenv.
Blank or invalid values fall back to the default.
"""

from __future__ import annotations

import os

DEFAULT_TEAM_YEAR = "2025/26"
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MiB
DEFAULT_CORS_ORIGINS = ("http://localhost:3000", "http://127.0.0.1:3000")


def env_str(name: str, default: str = "") -> str:
    return os.environ.get(name, "").strip() or default


def env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def env_list(name: str, default: tuple[str, ...] = ()) -> list[str]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return list(default)
    return [part.strip() for part in raw.split(",") if part.strip()]


def team_year() -> str:
    return env_str("TEAM_YEAR", DEFAULT_TEAM_YEAR)


def max_upload_bytes() -> int:
    value = env_int("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)
    return value if value > 0 else DEFAULT_MAX_UPLOAD_BYTES


def cors_origins() -> list[str]:
    return env_list("CORS_ORIGINS", DEFAULT_CORS_ORIGINS)


def storage_url() -> str:
    return env_str("STORAGE_URL")


def storage_service_key() -> str:
    return env_str("STORAGE_SERVICE_KEY")


def log_level() -> str:
    return env_str("LOG_LEVEL", "INFO").upper()
