from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    log_level: str
    sentry_dsn: str | None


def load_settings() -> Settings:
    return Settings(
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").strip().upper(),
        sentry_dsn=_get_env("SENTRY_DSN"),
    )


settings = load_settings()

__all__ = ["Settings", "settings", "load_settings"]
