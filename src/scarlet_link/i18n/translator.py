"""
Batch translation over the OpenAI Responses API.

Contract: an ordered list of source strings plus a target language code in,
an ordered list of translated strings of the same length out. Anything else
is a TranslationError.
"""

import json
from openai import AsyncOpenAI

from scarlet_link import config

SYSTEM_PROMPT = """Translate the following array of text strings into the language specified by the target language code.
Return the translated strings in the same order as the input array. Only return the translated text."""

TRANSLATE_SCHEMA = {
    "type": "json_schema",
    "name": "translate_result",
    "strict": True,
    "schema": {
        "type": "object",
        "properties": {
            "translations": {
                "type": "array",
                "items": {"type": "string"},
            },
        },
        "required": ["translations"],
        "additionalProperties": False,
    },
}


class TranslationError(Exception):
    """The translation service returned nothing usable."""


def build_user_prompt(texts: list[str], target_language: str) -> str:
    lines = [f"Target Language: {target_language}", "Texts to Translate:"]
    lines.extend(f"- {json.dumps(text, ensure_ascii=False)}" for text in texts)
    return "\n".join(lines)


def parse_translations(raw: str, expected: int) -> list[str]:
    """
    Parse the model output into a list of translations.

    Args:
        raw: JSON text returned by the model
        expected: Number of source strings that were sent

    Returns:
        Translated strings, same order as the input

    Raises:
        TranslationError: If the output is not valid JSON, not a list of
            strings, or does not have exactly `expected` items
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as e:
        raise TranslationError(f"invalid JSON from model: {e}") from e

    translations = data.get("translations") if isinstance(data, dict) else None
    if not isinstance(translations, list):
        raise TranslationError("response has no 'translations' list")
    if len(translations) != expected:
        raise TranslationError(
            f"expected {expected} translations, got {len(translations)}"
        )
    if not all(isinstance(t, str) for t in translations):
        raise TranslationError("non-string item in translations")
    return translations


class OpenAIBatchTranslator:
    """Translate a batch of UI strings in a single model call."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: AsyncOpenAI | None = None,
        temperature: float = 0.1,
    ):
        self.api_key = api_key if api_key is not None else config.OPENAI_API_KEY
        self.model = model or config.TRANSLATION_MODEL
        self.temperature = temperature
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self.api_key:
                raise ValueError("OPENAI_API_KEY not configured")
            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def __call__(self, texts: list[str], target_language: str) -> list[str]:
        if not texts:
            return []

        response = await self.client.responses.create(
            model=self.model,
            input=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(texts, target_language)},
            ],
            temperature=self.temperature,
            store=False,
            text={"format": TRANSLATE_SCHEMA},
        )

        result = (response.output_text or "").strip()
        if not result:
            raise TranslationError("empty response from model")

        translations = parse_translations(result, len(texts))
        print(f"🌐 Translated {len(texts)} strings → {target_language}")
        return translations

    async def close(self):
        if self._client is not None:
            await self._client.close()
