"""
Perplexica configuration

Collects everything the Perplexica Ask tool needs at runtime: the optional
API key, the backend endpoint, the fixed model/mode selection sent with each
search request, and process-level options such as the log level.
"""

from dataclasses import dataclass
from functools import lru_cache
import os
from typing import Optional

PERPLEXICA_API_URL = "https://perplexica.knaxx.com/api/search"

CHAT_MODEL_PROVIDER = "openai"
CHAT_MODEL_NAME = "gpt-4o-mini"
EMBEDDING_MODEL_PROVIDER = "openai"
EMBEDDING_MODEL_NAME = "text-embedding-3-large"
OPTIMIZATION_MODE = "speed"
FOCUS_MODE = "webSearch"


@dataclass(slots=True)
class PerplexicaSettings:
    """Perplexica Ask configuration"""

    api_key: Optional[str] = None
    api_url: str = PERPLEXICA_API_URL

    chat_provider: str = CHAT_MODEL_PROVIDER
    chat_model: str = CHAT_MODEL_NAME
    embedding_provider: str = EMBEDDING_MODEL_PROVIDER
    embedding_model: str = EMBEDDING_MODEL_NAME
    optimization_mode: str = OPTIMIZATION_MODE
    focus_mode: str = FOCUS_MODE

    # None disables the client-side timeout entirely
    request_timeout: Optional[float] = None

    log_level: str = "INFO"


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    value = os.getenv(key)
    if value is None:
        return default
    value = value.strip()
    return value or default


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    if raw is None:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


@lru_cache(maxsize=1)
def get_perplexica_settings() -> PerplexicaSettings:
    """Read environment variables once and return PerplexicaSettings"""

    log_level = (_env("PERPLEXICA_LOG_LEVEL", "INFO") or "INFO").upper()

    return PerplexicaSettings(
        api_key=_env("PERPLEXICA_API_KEY"),
        request_timeout=_parse_timeout(_env("PERPLEXICA_REQUEST_TIMEOUT")),
        log_level=log_level,
    )


def reset_perplexica_settings_cache() -> None:
    """Clear the cached settings (used by tests)"""

    get_perplexica_settings.cache_clear()  # type: ignore[attr-defined]
