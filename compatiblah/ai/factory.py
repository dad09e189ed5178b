from compatiblah.ai.config import AIConfig, load_ai_config
from compatiblah.ai.types import TextGenerationClient

from compatiblah.ai.providers.gemini_provider import GeminiProvider
from compatiblah.core.errors import ConfigurationError


def _looks_like_placeholder(value: str) -> bool:
    lower = value.strip().lower()
    return lower.startswith("your_") or lower.startswith("replace_") or lower in {"changeme", "todo"}


def get_ai_client(cfg: AIConfig | None = None) -> TextGenerationClient:
    cfg = cfg or load_ai_config()

    if cfg.provider == "gemini":
        if not cfg.api_key or _looks_like_placeholder(cfg.api_key):
            raise ConfigurationError("GEMINI_API_KEY environment variable not set")
        return GeminiProvider(
            model=cfg.model,
            api_key=cfg.api_key,
            base_url=cfg.base_url,
            timeout_s=cfg.timeout_s,
            max_attempts=cfg.max_attempts,
            backoff_s=cfg.backoff_s,
        )

    raise ConfigurationError(f"Unsupported AI_PROVIDER='{cfg.provider}'")
