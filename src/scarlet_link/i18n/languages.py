"""Languages offered by the UI language switcher."""

DEFAULT_LANGUAGE = "en"

LANGUAGES = [
    {"code": "en", "name": "English"},
    {"code": "es", "name": "Español"},
    {"code": "ta", "name": "தமிழ்"},
    {"code": "te", "name": "తెలుగు"},
    {"code": "hi", "name": "हिन्दी"},
    {"code": "kn", "name": "ಕನ್ನಡ"},
    {"code": "mr", "name": "मराठी"},
    {"code": "fr", "name": "Français"},
    {"code": "de", "name": "Deutsch"},
]

_NAMES = {lang["code"]: lang["name"] for lang in LANGUAGES}


def language_name(code: str) -> str:
    """Human-readable name for a language code, or the code itself if unknown."""
    return _NAMES.get(code, code)
