"""Tests for the cancellable debounce timer."""

import asyncio

from scarlet_link.i18n.timer import DebounceTimer


def test_reschedule_fires_once():
    fired = []

    async def scenario():
        timer = DebounceTimer(lambda: fired.append(True))
        for _ in range(5):
            timer.schedule(0.02)
            await asyncio.sleep(0.005)
        assert timer.armed
        await asyncio.sleep(0.05)
        assert not timer.armed

    asyncio.run(scenario())
    assert fired == [True]


def test_cancel_prevents_callback():
    fired = []

    async def scenario():
        timer = DebounceTimer(lambda: fired.append(True))
        timer.schedule(0.01)
        timer.cancel()
        assert timer.task is None
        await asyncio.sleep(0.03)

    asyncio.run(scenario())
    assert fired == []


def test_callback_may_rearm_timer():
    fired = []

    async def scenario():
        def callback():
            fired.append(True)
            if len(fired) < 3:
                timer.schedule(0.005)

        timer = DebounceTimer(callback)
        timer.schedule(0.005)
        await asyncio.sleep(0.1)

    asyncio.run(scenario())
    assert len(fired) == 3
