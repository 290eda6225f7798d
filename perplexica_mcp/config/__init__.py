from .settings import (
    PERPLEXICA_API_URL,
    PerplexicaSettings,
    get_perplexica_settings,
    reset_perplexica_settings_cache,
)

__all__ = [
    "PERPLEXICA_API_URL",
    "PerplexicaSettings",
    "get_perplexica_settings",
    "reset_perplexica_settings_cache",
]
