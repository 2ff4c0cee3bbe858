"""
Cancellation token

One-shot, broadcast stop signal scoped to a single animation run.
RunStateGuard creates a fresh token on every successful acquire, so a
token that belonged to a finished run can be cancelled all day long
without reaching the next one.
"""

from __future__ import annotations

import asyncio
import itertools
import threading
from typing import Optional

_run_ids = itertools.count(1)


def _running_loop() -> Optional[asyncio.AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class CancellationToken:
    """
    Poll points call `cancelled` or `await wait(timeout)`.

    wait() never blocks longer than `timeout`, and returns early as soon
    as cancel() fires, so a routine that waits in poll-interval chunks is
    interruptible at that granularity or better.

    cancel() may be called from any thread: the flag flips immediately and
    the waiters' event is set on the loop that owns it.
    """

    def __init__(self, label: str = "animation"):
        self.run_id = next(_run_ids)
        self.label = label
        self._lock = threading.Lock()
        self._cancelled = False
        self._reason: Optional[str] = None
        self._event = asyncio.Event()
        self._loop = _running_loop()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: str = "requested") -> None:
        with self._lock:
            if self._cancelled:
                return
            self._reason = reason
            self._cancelled = True
            loop = self._loop

        if loop is None or loop.is_closed() or _running_loop() is loop:
            self._event.set()
        else:
            loop.call_soon_threadsafe(self._event.set)

    async def wait(self, timeout: float) -> bool:
        """
        Sleep up to `timeout` seconds.

        Returns True if the token was (or became) cancelled.
        """
        if self._loop is None:
            with self._lock:
                self._loop = asyncio.get_running_loop()
                if self._cancelled:
                    self._event.set()
        if self._cancelled:
            return True
        if timeout <= 0:
            await asyncio.sleep(0)
            return self._cancelled
        try:
            await asyncio.wait_for(self._event.wait(), timeout=timeout)
        except asyncio.TimeoutError:
            return self._cancelled
        return True

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else "armed"
        return f"<CancellationToken run={self.run_id} {self.label} {state}>"
