"""
Stateless i18n endpoints: language list and one-shot batch translation.
Endpoints: /api/i18n/languages, /api/i18n/translate
"""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from scarlet_link.dependencies import get_translator
from scarlet_link.i18n.languages import DEFAULT_LANGUAGE, LANGUAGES
from scarlet_link.i18n.translator import TranslationError

router = APIRouter()


class TranslateRequest(BaseModel):
    texts: list[str]
    target_language: str


class TranslateResponse(BaseModel):
    translations: list[str]


@router.get("/languages")
async def list_languages():
    return {"default": DEFAULT_LANGUAGE, "languages": LANGUAGES}


@router.post("/translate", response_model=TranslateResponse)
async def translate(body: TranslateRequest, translator=Depends(get_translator)):
    """Translate a list of strings, preserving order."""
    if body.target_language == DEFAULT_LANGUAGE or not body.texts:
        return TranslateResponse(translations=list(body.texts))

    try:
        translations = await translator(body.texts, body.target_language)
    except TranslationError as e:
        print(f"❌ /translate upstream error: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ValueError as e:
        # Missing API key
        raise HTTPException(status_code=503, detail=str(e))
    except Exception as e:
        print(f"❌ /translate error: {type(e).__name__}: {e}")
        raise HTTPException(status_code=502, detail="Translation service error")

    if len(translations) != len(body.texts):
        raise HTTPException(
            status_code=502,
            detail=f"expected {len(body.texts)} translations, got {len(translations)}",
        )

    return TranslateResponse(translations=translations)
