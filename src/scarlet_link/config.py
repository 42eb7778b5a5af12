"""
Runtime configuration, read from the environment (and a local .env file).
"""

import os
from dotenv import load_dotenv

load_dotenv()

OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
TRANSLATION_MODEL = os.getenv("TRANSLATION_MODEL", "gpt-4.1-mini")

# Debounce / retry timings, in milliseconds
TRANSLATION_DEBOUNCE_MS = int(os.getenv("TRANSLATION_DEBOUNCE_MS", "500"))
TRANSLATION_SWITCH_DELAY_MS = int(os.getenv("TRANSLATION_SWITCH_DELAY_MS", "100"))
TRANSLATION_RETRY_LIMIT = int(os.getenv("TRANSLATION_RETRY_LIMIT", "3"))
TRANSLATION_RETRY_DELAY_MS = int(os.getenv("TRANSLATION_RETRY_DELAY_MS", "2000"))

ALLOWED_ORIGINS = [
    o.strip()
    for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:8000").split(",")
    if o.strip()
]
ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
