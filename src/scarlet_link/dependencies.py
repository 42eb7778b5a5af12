"""
Shared FastAPI dependencies.
"""

from fastapi.requests import HTTPConnection

from scarlet_link import config
from scarlet_link.i18n.translator import OpenAIBatchTranslator


def get_translator(conn: HTTPConnection) -> OpenAIBatchTranslator:
    """Batch translator created and closed by the app lifespan (see main.py)."""
    return conn.app.state.translator


def get_cache_settings() -> dict:
    """Timing settings for per-session translation caches, in seconds."""
    return {
        "debounce": config.TRANSLATION_DEBOUNCE_MS / 1000,
        "switch_delay": config.TRANSLATION_SWITCH_DELAY_MS / 1000,
        "retry_limit": config.TRANSLATION_RETRY_LIMIT,
        "retry_delay": config.TRANSLATION_RETRY_DELAY_MS / 1000,
    }
