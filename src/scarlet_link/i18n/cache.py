"""
On-demand, batched, debounced translation memoization.

Render code asks for the localized form of a literal string; the cache
answers from memory and quietly queues anything it has not seen yet:

- registry:     every source string ever requested (survives language switches)
- pending:      strings waiting to be translated into the current language
- translations: source → localized, valid for the current language only

New strings restart a debounce timer. When the timer fires, the whole pending
set is drained into one batch call to the translator. Strings requested while
a batch is in flight form a new pending set with their own timer.

Key invariant: a batch result is only merged if the language session it was
issued for is still the active one.
"""

import asyncio

from scarlet_link import config
from scarlet_link.i18n.languages import DEFAULT_LANGUAGE, language_name
from scarlet_link.i18n.timer import DebounceTimer
from scarlet_link.i18n.translator import TranslationError


class TranslationCache:
    """
    Per-session translation cache.

    Created when a session starts, closed when it ends. resolve() and
    set_language() are synchronous and must be called from the event loop
    thread; batches run as background tasks.
    """

    def __init__(
        self,
        translator,
        language: str = DEFAULT_LANGUAGE,
        on_complete=None,
        on_failed=None,
        on_update=None,
        debounce: float = config.TRANSLATION_DEBOUNCE_MS / 1000,
        switch_delay: float = config.TRANSLATION_SWITCH_DELAY_MS / 1000,
        retry_limit: int = config.TRANSLATION_RETRY_LIMIT,
        retry_delay: float = config.TRANSLATION_RETRY_DELAY_MS / 1000,
    ):
        """
        Args:
            translator: async (texts, target_language) -> list of translations
            language: Initial target language (no bulk translation is triggered)
            on_complete: async (code, language_name), after a successful flush
            on_failed: async (code, error), after a failed flush
            on_update: async (code, translations), after new translations merge
            debounce: Quiet period in seconds before pending strings are flushed
            switch_delay: Delay in seconds before the bulk flush after a switch
            retry_limit: Consecutive failures of a string retried automatically (0 disables)
            retry_delay: Base retry delay in seconds, multiplied by the attempt number
        """
        self.translator = translator
        self.on_complete = on_complete
        self.on_failed = on_failed
        self.on_update = on_update
        self.debounce = debounce
        self.switch_delay = switch_delay
        self.retry_limit = retry_limit
        self.retry_delay = retry_delay

        self._language = language
        # dicts used as insertion-ordered sets
        self._registry: dict[str, None] = {}
        self._pending: dict[str, None] = {}
        self._translations: dict[str, str] = {}

        # Bumped on every language switch; in-flight batches carry their own copy
        self._generation = 0
        # Consecutive failed attempts per key, for the current session
        self._attempts: dict[str, int] = {}

        self._timer = DebounceTimer(self._start_flush)
        self._flush_tasks: set[asyncio.Task] = set()

    @property
    def language(self) -> str:
        return self._language

    @property
    def registry(self) -> list[str]:
        return list(self._registry)

    @property
    def pending(self) -> list[str]:
        return list(self._pending)

    @property
    def translations(self) -> dict[str, str]:
        return dict(self._translations)

    @property
    def is_translating(self) -> bool:
        return any(not t.done() for t in self._flush_tasks)

    def resolve(self, source: str) -> str:
        """Localized form of `source`, or `source` itself until it is translated."""
        if not source:
            return ""

        if source not in self._registry:
            self._registry[source] = None
            if self._language != DEFAULT_LANGUAGE:
                self._pending[source] = None
                self._timer.schedule(self.debounce)

        if self._language == DEFAULT_LANGUAGE:
            return source
        return self._translations.get(source) or source

    def resolve_many(self, sources: list[str]) -> list[str]:
        return [self.resolve(s) for s in sources]

    def set_language(self, code: str):
        """
        Switch the target language.

        Drops every translation and pending string of the old language. For
        anything other than the base language, the entire registry is queued
        again, so strings from views not currently rendered are translated too.
        """
        if code == self._language:
            return

        print(f"🌍 Language: {self._language} → {code} ({len(self._registry)} known strings)")
        self._language = code
        self._generation += 1
        self._translations.clear()
        self._pending.clear()
        self._timer.cancel()
        self._attempts.clear()

        if code != DEFAULT_LANGUAGE:
            self._pending.update(dict.fromkeys(self._registry))
            self._timer.schedule(self.switch_delay)

    def retry(self) -> bool:
        """Flush pending strings soon. Returns False when there is nothing to retry."""
        if self._language == DEFAULT_LANGUAGE or not self._pending:
            return False
        self._timer.schedule(self.switch_delay)
        return True

    def _start_flush(self):
        task = asyncio.get_running_loop().create_task(self.flush())
        self._flush_tasks.add(task)
        task.add_done_callback(self._flush_tasks.discard)

    async def flush(self):
        """Send everything pending to the translator as one batch."""
        language = self._language
        generation = self._generation

        if language == DEFAULT_LANGUAGE:
            return

        if not self._pending:
            await self._notify(self.on_complete, language, language_name(language))
            return

        # Snapshot and clear with no await in between
        batch = list(self._pending)
        self._pending.clear()

        print(f"📦 Flushing {len(batch)} strings → {language}")

        try:
            translated = await self.translator(batch, language)
            if not isinstance(translated, list) or len(translated) != len(batch):
                got = len(translated) if isinstance(translated, list) else type(translated).__name__
                raise TranslationError(f"expected {len(batch)} translations, got {got}")
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if generation != self._generation:
                print(f"🗑️  Dropped failed batch for stale session ({language})")
                return
            print(f"❌ Translation failed ({language}, {len(batch)} strings): {e}")
            # Failed keys go back in front of anything registered meanwhile
            self._pending = {**dict.fromkeys(batch), **self._pending}
            attempt = 1 + max(self._attempts.get(k, 0) for k in batch)
            for k in batch:
                self._attempts[k] = attempt
            await self._notify(self.on_failed, language, e)
            self._schedule_retry(attempt)
            return

        if generation != self._generation:
            print(f"🗑️  Discarded stale batch ({language}, {len(batch)} strings)")
            return

        self._translations.update(zip(batch, translated))
        for k in batch:
            self._attempts.pop(k, None)
        print(f"✅ Merged {len(batch)} translations ({language}), {len(self._translations)} cached")

        await self._notify(self.on_update, language, self.translations)
        await self._notify(self.on_complete, language, language_name(language))

    def _schedule_retry(self, attempt: int):
        if attempt > self.retry_limit:
            print(f"⏸️  Retry limit reached ({self.retry_limit}), waiting for next trigger")
            return
        if self._timer.armed:
            # A new string already armed the timer; its flush picks these up
            return
        delay = self.retry_delay * attempt
        print(f"🔁 Retry {attempt}/{self.retry_limit} in {delay:.1f}s")
        self._timer.schedule(delay)

    async def _notify(self, callback, *args):
        if callback is None:
            return
        try:
            await callback(*args)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            print(f"⚠️ Notification error: {type(e).__name__}: {e}")

    async def wait_idle(self):
        """Wait until no timer is armed and no batch is in flight."""
        while True:
            tasks = {t for t in self._flush_tasks if not t.done()}
            if self._timer.task is not None:
                tasks.add(self._timer.task)
            if not tasks:
                return
            await asyncio.wait(tasks)

    async def close(self):
        self._timer.cancel()
        tasks = list(self._flush_tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._flush_tasks.clear()
