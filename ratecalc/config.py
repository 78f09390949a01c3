"""
ratecalc/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

DEFAULT_ORDERS_DIR = "ShipStation Orders"
DEFAULT_STORE_DISPLAY_ORDER: tuple[str, ...] = (
    "TikTok Shop US Store",
    "Shopify Store",
    "Walmart Store",
    "Temu Store",
    "Manual Orders",
)
DEFAULT_MAX_UPLOAD_BYTES = 20 * 1024 * 1024


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    for filename in (".env", ".env.local"):
        env_path = PROJECT_ROOT / filename
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


def _get_list_env(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """
    Read a comma-separated list from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    items = tuple(item.strip() for item in value.split(",") if item.strip())
    return items if items else default


def get_log_level() -> str:
    """
    Return the configured LOG_LEVEL name (default INFO).
    """

    return _get_str_env("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class ReportSettings:
    """
    Where input exports are found and reports are written.
    """

    orders_dir: Path
    output_dir: Path
    store_display_order: tuple[str, ...] = DEFAULT_STORE_DISPLAY_ORDER


@dataclass(frozen=True)
class APISettings:
    """
    Runtime settings for the HTTP upload endpoint.
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


@lru_cache(maxsize=1)
def get_report_settings() -> ReportSettings:
    """
    Return cached report settings from environment variables.
    """

    return ReportSettings(
        orders_dir=Path(_get_str_env("SHIPSTATION_ORDERS_DIR", DEFAULT_ORDERS_DIR)),
        output_dir=Path(_get_str_env("REPORT_OUTPUT_DIR", str(Path.home() / "Downloads"))),
        store_display_order=_get_list_env("STORE_DISPLAY_ORDER", DEFAULT_STORE_DISPLAY_ORDER),
    )


@lru_cache(maxsize=1)
def get_api_settings() -> APISettings:
    """
    Return cached API settings from environment variables.
    """

    return APISettings(
        max_upload_bytes=max(1, _get_int_env("API_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
    )
