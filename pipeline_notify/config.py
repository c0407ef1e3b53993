"""
config.py
---------
Centralized configuration loading for the pipeline notification relay.

Reads environment variables (12-factor style) and exposes a single
Settings dataclass. The webhook URL may also be injected explicitly;
the environment always wins over the injected default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .errors import ConfigError


def _env(name: str) -> str | None:
    """Return the env var with surrounding whitespace/quotes removed, or None."""
    v = os.getenv(name)
    if v is None:
        return None
    v = v.strip().strip('\'"')
    return v or None


def _env_number(name: str, default, cast):
    raw = _env(name)
    if raw is None:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigError(f"Invalid value for {name}: {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True, slots=True)
class Settings:
    """Immutable relay settings."""

    webhook_url: str  # Teams incoming webhook, single target for every card
    timeout: float = 10.0  # seconds, per POST
    tz_name: str = "UTC"  # display timezone for card timestamps
    max_workers: int = 8


def load_settings(default_webhook_url: str | None = None) -> Settings:
    """
    Load and validate settings from environment variables.

    Parameters
    ----------
    default_webhook_url : str | None
        Fallback endpoint used when TEAMS_WEBHOOK_URL is not set.

    Returns
    -------
    Settings
        A frozen dataclass with all configuration values.

    Raises
    ------
    ConfigError
        If no webhook URL is available or a numeric variable is invalid.
    """
    webhook_url = _env("TEAMS_WEBHOOK_URL") or default_webhook_url
    if not webhook_url:
        raise ConfigError("Missing required environment variable: TEAMS_WEBHOOK_URL")

    return Settings(
        webhook_url=webhook_url,
        timeout=_env_number("TEAMS_TIMEOUT_SECONDS", 10.0, float),
        tz_name=_env("DISPLAY_TZ") or "UTC",
        max_workers=_env_number("RELAY_MAX_WORKERS", 8, int),
    )
