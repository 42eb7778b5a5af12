import asyncio


class DebounceTimer:
    """
    Single cancellable timer handle.

    schedule() arms the timer; calling it again before expiry cancels the
    previous arm (trailing-edge debounce). On expiry the callback runs
    synchronously on the event loop. Anything long-running should be spawned
    by the callback as its own task, so a later schedule() cannot cancel it.
    """

    def __init__(self, callback):
        self.callback = callback
        self._task: asyncio.Task | None = None

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def task(self) -> asyncio.Task | None:
        return self._task if self.armed else None

    def schedule(self, delay: float):
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire_after(delay))

    def cancel(self):
        if self._task and not self._task.done():
            self._task.cancel()
        self._task = None

    async def _fire_after(self, delay: float):
        await asyncio.sleep(delay)
        self._task = None
        self.callback()
