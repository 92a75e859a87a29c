"""Environment-driven configuration for the HTTP service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

__all__ = ["Settings", "SettingsError", "load_settings"]

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_CORS_ORIGINS = "*"
DEFAULT_SWEEP_INTERVAL_MINUTES = 60

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class SettingsError(ValueError):
    """Raised when an environment variable holds an unusable value."""


@dataclass(frozen=True)
class Settings:
    log_level: str
    cors_origins: Tuple[str, ...]
    sweep_interval_minutes: int


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build :class:`Settings` from *environ* (defaults to ``os.environ``)."""

    env = os.environ if environ is None else environ

    log_level = env.get("SUNTIMES_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if log_level not in _LOG_LEVELS:
        raise SettingsError(f"Unsupported SUNTIMES_LOG_LEVEL: {log_level}")

    origins = tuple(
        origin.strip()
        for origin in env.get("SUNTIMES_CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
        if origin.strip()
    )

    raw_interval = env.get("SUNTIMES_SWEEP_INTERVAL_MINUTES", str(DEFAULT_SWEEP_INTERVAL_MINUTES))
    try:
        interval = int(raw_interval)
    except ValueError as exc:
        raise SettingsError(
            f"SUNTIMES_SWEEP_INTERVAL_MINUTES must be an integer: {raw_interval!r}"
        ) from exc
    if interval <= 0 or 1440 % interval:
        raise SettingsError(
            f"SUNTIMES_SWEEP_INTERVAL_MINUTES must divide 1440: {interval}"
        )

    return Settings(
        log_level=log_level,
        cors_origins=origins,
        sweep_interval_minutes=interval,
    )
