"""
Run-State Guard

Single-flight admission for the LED strip. Every trigger source (scheduler
tick, manual test, manual alarm) goes through the same guard instance, which
is the only thing standing between the strip and a second concurrent writer.

    guard = RunStateGuard()
    if guard.try_acquire("sunrise") is AcquireResult.GRANTED:
        token = guard.token
        try:
            ...            # poll token.cancelled / await token.wait(dt)
        finally:
            guard.release(token)

A request that finds the guard busy is rejected, never queued.
"""

from __future__ import annotations

import threading
from typing import Optional

from engine.cancellation import CancellationToken
from models.enums import AcquireResult
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


class RunStateGuard:
    """
    idle <-> running state plus the cancellation token of the current run.

    State changes happen under a threading.Lock so the guard is atomic for
    callers on the event loop and for callers on worker threads alike.
    No method blocks on anything but that lock.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._token: Optional[CancellationToken] = None

    @property
    def token(self) -> Optional[CancellationToken]:
        """Token of the run holding the guard, None when idle."""
        return self._token

    def is_running(self) -> bool:
        return self._token is not None

    def try_acquire(self, label: str = "animation") -> AcquireResult:
        """Transition idle -> running and arm a fresh token, or report BUSY."""
        with self._lock:
            if self._token is not None:
                log.debug("Guard busy, request rejected", requested=label, holder=self._token.label)
                return AcquireResult.BUSY
            self._token = CancellationToken(label)
            log.debug("Guard acquired", run=self._token.run_id, label=label)
            return AcquireResult.GRANTED

    def release(self, token: Optional[CancellationToken] = None) -> bool:
        """
        Transition running -> idle and discard the current token.

        When `token` is given, only the run owning it may release; a stale
        release from an earlier run is ignored. Returns True if released.
        """
        with self._lock:
            if self._token is None:
                return False
            if token is not None and token is not self._token:
                log.warn(
                    "Ignoring release from stale run",
                    stale_run=token.run_id,
                    current_run=self._token.run_id,
                )
                return False
            log.debug("Guard released", run=self._token.run_id, label=self._token.label)
            self._token = None
            return True

    def request_cancel(self, reason: str = "requested") -> bool:
        """
        Signal the current run's token. No-op when idle.

        Returns True if a running animation was signalled.
        """
        with self._lock:
            token = self._token
            if token is None:
                return False
            token.cancel(reason)
        log.info("Cancellation requested", run=token.run_id, label=token.label, reason=reason)
        return True
