"""One-second tick schedulers.

A scheduler owns a single slot: at most one callback is armed at a time.
Arming an armed scheduler does nothing, disarming an idle one does nothing,
and re-arming after a disarm starts a fresh one-second cadence.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol, runtime_checkable

TickCallback = Callable[[], None]

TICK_SECONDS = 1.0


@runtime_checkable
class TickScheduler(Protocol):
    """Interface the controller drives its ticks through."""

    @property
    def armed(self) -> bool:
        """Whether a callback is currently scheduled."""
        ...

    def arm(self, callback: TickCallback) -> bool:
        """Start ticking ``callback``. Returns False if already armed."""
        ...

    def disarm(self) -> None:
        """Stop ticking. Safe to call when nothing is armed."""
        ...


class ManualTickScheduler:
    """Scheduler driven by explicit ``pulse()`` calls.

    Used by one-shot CLI commands, where nothing ticks, and by tests that
    want to step the clock deterministically.
    """

    def __init__(self):
        self._callback: TickCallback | None = None
        self.arm_count = 0

    @property
    def armed(self) -> bool:
        return self._callback is not None

    def arm(self, callback: TickCallback) -> bool:
        if self._callback is not None:
            return False
        self._callback = callback
        self.arm_count += 1
        return True

    def disarm(self) -> None:
        self._callback = None

    def pulse(self, count: int = 1) -> None:
        """Deliver ``count`` one-second pulses to whatever is armed."""
        for _ in range(count):
            if self._callback is None:
                return
            self._callback()


class AsyncioTickScheduler:
    """Scheduler backed by ``loop.call_later`` on the running event loop.

    Ticks run on the loop thread, interleaved with every other command the
    loop dispatches. If a tick raises, the scheduler disarms and keeps the
    exception in ``error`` for the owner of the loop to re-raise.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        interval: float = TICK_SECONDS,
    ):
        self._loop = loop
        self._interval = interval
        self._callback: TickCallback | None = None
        self._handle: asyncio.TimerHandle | None = None
        self.error: BaseException | None = None

    @property
    def armed(self) -> bool:
        return self._callback is not None

    def arm(self, callback: TickCallback) -> bool:
        if self._callback is not None:
            return False
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        self._callback = callback
        self._handle = self._loop.call_later(self._interval, self._fire)
        return True

    def disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
        self._handle = None
        self._callback = None

    def _fire(self) -> None:
        callback = self._callback
        if callback is None:
            return
        # Schedule the next tick first so a callback that disarms cancels it.
        self._handle = self._loop.call_later(self._interval, self._fire)
        try:
            callback()
        except Exception as e:
            self.disarm()
            self.error = e
