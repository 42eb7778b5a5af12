# routers/websocket.py
"""
WebSocket route for translation sessions.

One connection = one session = one TranslationCache. The client sends the
strings it is about to render and its language choice; the server answers
from the cache and pushes translations and toasts as batches complete.
Endpoint: /ws/i18n
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from scarlet_link.dependencies import get_cache_settings, get_translator
from scarlet_link.i18n.cache import TranslationCache
from scarlet_link.i18n.languages import DEFAULT_LANGUAGE, language_name

router = APIRouter()


async def parse_client_message(ws: WebSocket) -> dict[str, Any]:
    """
    Receive one client message.

    Returns:
        Decoded JSON object, or {"type": "invalid", "message": ...} if the
        frame is not a JSON object
    """
    text = await ws.receive_text()
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return {"type": "invalid", "message": f"Invalid JSON: {e.msg}"}
    if not isinstance(data, dict):
        return {"type": "invalid", "message": "Expected a JSON object"}
    return data


async def send_toast(ws: WebSocket, title: str, description: str, variant: str = "default") -> None:
    await ws.send_json({
        "type": "toast",
        "variant": variant,
        "title": title,
        "description": description,
    })


async def send_error(ws: WebSocket, message: str) -> None:
    await ws.send_json({"type": "error", "message": message})


@router.websocket("/i18n")
async def i18n_session(
    ws: WebSocket,
    translator=Depends(get_translator),
    settings: dict = Depends(get_cache_settings),
):
    await ws.accept()
    closed = False

    async def on_update(code: str, translations: dict[str, str]):
        if not closed:
            await ws.send_json({"type": "translations", "language": code, "translations": translations})

    async def on_complete(code: str, name: str):
        if not closed:
            await send_toast(ws, "Translation Complete", f"The page has been translated to {name}.")

    async def on_failed(code: str, error: Exception):
        if not closed:
            await send_toast(
                ws,
                "Translation Failed",
                "Could not translate the page. Please try again.",
                variant="destructive",
            )

    cache = TranslationCache(
        translator,
        language=ws.query_params.get("lang") or DEFAULT_LANGUAGE,
        on_complete=on_complete,
        on_failed=on_failed,
        on_update=on_update,
        **settings,
    )
    print(f"🔌 /ws/i18n session opened (lang={cache.language})")

    try:
        while True:
            message = await parse_client_message(ws)
            msg_type = message.get("type")

            if msg_type == "resolve":
                texts = message.get("texts")
                if not isinstance(texts, list) or not all(isinstance(t, str) for t in texts):
                    await send_error(ws, "'texts' must be a list of strings")
                    continue
                await ws.send_json({
                    "type": "resolved",
                    "language": cache.language,
                    "texts": cache.resolve_many(texts),
                })

            elif msg_type == "set_language":
                code = message.get("code")
                if not isinstance(code, str) or not code:
                    await send_error(ws, "'code' must be a non-empty string")
                    continue
                cache.set_language(code)
                await ws.send_json({
                    "type": "language",
                    "language": cache.language,
                    "name": language_name(cache.language),
                })

            elif msg_type == "retry":
                cache.retry()

            elif msg_type == "end_session":
                print("Session ended by client")
                closed = True
                await ws.close()
                break

            elif msg_type == "invalid":
                await send_error(ws, message["message"])

            else:
                await send_error(ws, f"Unknown message type: {msg_type}")

    except WebSocketDisconnect:
        pass
    except Exception as e:
        print(f"❌ /ws/i18n error: {type(e).__name__}: {e}")
    finally:
        closed = True
        await cache.close()
        print(f"🔌 /ws/i18n session closed ({len(cache.registry)} strings seen)")
