"""
Localization for the Scarlet Link dashboard
"""

from .cache import TranslationCache
from .languages import LANGUAGES, DEFAULT_LANGUAGE, language_name
from .translator import OpenAIBatchTranslator, TranslationError

__all__ = [
    "TranslationCache",
    "LANGUAGES",
    "DEFAULT_LANGUAGE",
    "language_name",
    "OpenAIBatchTranslator",
    "TranslationError",
]
