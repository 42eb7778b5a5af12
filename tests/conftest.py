import asyncio

import pytest

from scarlet_link.i18n.cache import TranslationCache

SPANISH = {"Hello": "Hola", "World": "Mundo", "Donate": "Donar"}


class FakeTranslator:
    """Records every batch; optionally fails or blocks on a gate."""

    def __init__(self, table=None, fail=0, short=False, fail_on=None):
        self.table = table if table is not None else SPANISH
        self.fail = fail
        self.short = short
        self.fail_on = set(fail_on or ())
        self.gate: asyncio.Event | None = None
        # Only batches containing one of these keys wait on the gate
        self.gate_on: set[str] | None = None
        self.calls: list[tuple[list[str], str]] = []

    async def __call__(self, texts, target_language):
        self.calls.append((list(texts), target_language))
        if self.gate is not None and (self.gate_on is None or self.gate_on & set(texts)):
            await self.gate.wait()
        if self.fail > 0:
            self.fail -= 1
            raise RuntimeError("service unavailable")
        if self.fail_on & set(texts):
            raise RuntimeError("service rejected batch")
        if self.short:
            return []
        return [self._translate(t, target_language) for t in texts]

    def _translate(self, text, target_language):
        if target_language == "es" and text in self.table:
            return self.table[text]
        return f"{text} [{target_language}]"


class Events:
    """Collects notifier callbacks."""

    def __init__(self):
        self.complete: list[tuple[str, str]] = []
        self.failed: list[str] = []
        self.updates: list[dict] = []

    async def on_complete(self, code, name):
        self.complete.append((code, name))

    async def on_failed(self, code, error):
        self.failed.append(code)

    async def on_update(self, code, translations):
        self.updates.append(translations)


def make_cache(translator, events=None, **kwargs) -> TranslationCache:
    options = {
        "debounce": 0.01,
        "switch_delay": 0.005,
        "retry_limit": 0,
        "retry_delay": 0.01,
    }
    options.update(kwargs)
    if events is not None:
        options.setdefault("on_complete", events.on_complete)
        options.setdefault("on_failed", events.on_failed)
        options.setdefault("on_update", events.on_update)
    return TranslationCache(translator, **options)


async def wait_for_calls(translator: FakeTranslator, count: int, timeout: float = 1.0):
    async def _poll():
        while len(translator.calls) < count:
            await asyncio.sleep(0.001)

    await asyncio.wait_for(_poll(), timeout)


@pytest.fixture
def translator():
    return FakeTranslator()


@pytest.fixture
def events():
    return Events()
