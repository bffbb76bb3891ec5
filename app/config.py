"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

_ENV_FILES = (".env", ".env.local")


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in _ENV_FILES:
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


INT_SETTINGS: dict[str, int] = {
    "DASHBOARD_SAMPLE_ROWS": 20,
    "DASHBOARD_RAW_POINT_LIMIT": 500,
    "DASHBOARD_MAX_CHART_GROUPS": 20,
    "DASHBOARD_FILTER_MAX_UNIQUE": 30,
    "DASHBOARD_MAX_UPLOAD_MB": 50,
}


@dataclass(frozen=True)
class DashboardSettings:
    """
    Runtime settings for dataset profiling and dashboard rendering.
    """

    sample_rows: int = 20
    raw_point_limit: int = 500
    max_chart_groups: int = 20
    filter_max_unique: int = 30
    currency_symbol: str = "$"
    max_upload_mb: int = 50

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


@lru_cache(maxsize=1)
def get_dashboard_settings() -> DashboardSettings:
    """
    Return cached dashboard settings from environment variables.
    """

    return DashboardSettings(
        sample_rows=max(1, _get_int_env("DASHBOARD_SAMPLE_ROWS", 20)),
        raw_point_limit=max(1, _get_int_env("DASHBOARD_RAW_POINT_LIMIT", 500)),
        max_chart_groups=max(1, _get_int_env("DASHBOARD_MAX_CHART_GROUPS", 20)),
        filter_max_unique=max(2, _get_int_env("DASHBOARD_FILTER_MAX_UNIQUE", 30)),
        currency_symbol=_get_str_env("DASHBOARD_CURRENCY_SYMBOL", "$"),
        max_upload_mb=max(1, _get_int_env("DASHBOARD_MAX_UPLOAD_MB", 50)),
    )
