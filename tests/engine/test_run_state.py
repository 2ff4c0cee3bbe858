import asyncio

import pytest

from engine.cancellation import CancellationToken
from engine.run_state import RunStateGuard
from models.enums import AcquireResult


def test_acquire_release_cycle(guard):
    assert not guard.is_running()
    assert guard.token is None

    assert guard.try_acquire("first") is AcquireResult.GRANTED
    assert guard.is_running()
    assert guard.token.label == "first"

    assert guard.try_acquire("second") is AcquireResult.BUSY

    assert guard.release(guard.token)
    assert not guard.is_running()
    assert guard.token is None


def test_each_acquire_gets_a_fresh_token(guard):
    guard.try_acquire()
    first = guard.token
    guard.release(first)

    guard.try_acquire()
    second = guard.token

    assert second is not first
    assert second.run_id != first.run_id
    assert not second.cancelled


def test_cancel_when_idle_is_noop(guard):
    assert guard.request_cancel() is False

    guard.try_acquire()
    assert not guard.token.cancelled


def test_cancel_reaches_only_current_run(guard):
    guard.try_acquire()
    old = guard.token
    assert guard.request_cancel("stop") is True
    assert old.cancelled
    assert old.reason == "stop"
    guard.release(old)

    guard.try_acquire()
    assert not guard.token.cancelled

    # cancelling a stale token directly cannot reach the new run
    old.cancel()
    assert not guard.token.cancelled


def test_stale_release_is_ignored(guard):
    guard.try_acquire()
    old = guard.token
    guard.release(old)

    guard.try_acquire()
    current = guard.token

    assert guard.release(old) is False
    assert guard.is_running()
    assert guard.token is current


def test_release_when_idle(guard):
    assert guard.release() is False


def test_concurrent_acquire_from_threads_grants_exactly_one():
    import threading

    guard = RunStateGuard()
    barrier = threading.Barrier(16)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        r = guard.try_acquire()
        with lock:
            results.append(r)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(AcquireResult.GRANTED) == 1
    assert results.count(AcquireResult.BUSY) == 15


@pytest.mark.asyncio
async def test_token_wait_times_out_without_cancel():
    token = CancellationToken()
    assert await token.wait(0.01) is False
    assert await token.wait(0) is False


@pytest.mark.asyncio
async def test_token_wait_returns_early_on_cancel():
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    loop.call_later(0.01, token.cancel, "test")

    start = loop.time()
    assert await token.wait(5.0) is True
    assert loop.time() - start < 1.0
    assert token.reason == "test"


@pytest.mark.asyncio
async def test_cancel_is_one_shot():
    token = CancellationToken()
    token.cancel("first")
    token.cancel("second")
    assert token.reason == "first"
    assert await token.wait(10) is True


@pytest.mark.asyncio
async def test_cancel_from_worker_thread_wakes_waiter(guard):
    import threading

    guard.try_acquire("sunrise")
    token = guard.token
    loop = asyncio.get_running_loop()
    waiter = asyncio.create_task(token.wait(5.0))
    await asyncio.sleep(0)

    worker = threading.Thread(target=guard.request_cancel, args=("button",))
    start = loop.time()
    worker.start()

    assert await asyncio.wait_for(waiter, timeout=1.0) is True
    worker.join()
    assert loop.time() - start < 1.0
    assert token.cancelled
    assert token.reason == "button"


@pytest.mark.asyncio
async def test_cancel_before_first_wait_returns_at_once():
    token = CancellationToken()
    token.cancel("early")
    assert await token.wait(1.0) is True
