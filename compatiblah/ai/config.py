from __future__ import annotations

from dataclasses import dataclass

from compatiblah.core.config import _get_env, _get_env_float, _get_env_int


@dataclass(frozen=True)
class AIConfig:
    provider: str
    api_key: str | None
    model: str
    base_url: str
    timeout_s: float
    max_attempts: int
    backoff_s: float


def load_ai_config() -> AIConfig:
    return AIConfig(
        provider=(_get_env("AI_PROVIDER", "gemini") or "gemini").strip().lower(),
        api_key=(_get_env("GEMINI_API_KEY") or "").strip() or None,
        model=(_get_env("GEMINI_MODEL", "gemini-2.0-flash") or "gemini-2.0-flash").strip(),
        base_url=(
            _get_env("GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1")
            or "https://generativelanguage.googleapis.com/v1"
        ).rstrip("/"),
        timeout_s=_get_env_float("GEMINI_TIMEOUT_S", 60.0),
        max_attempts=max(1, _get_env_int("GEMINI_MAX_ATTEMPTS", 3)),
        backoff_s=_get_env_float("GEMINI_BACKOFF_S", 1.0),
    )
