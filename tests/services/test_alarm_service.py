import asyncio

import pytest

from hardware.led.virtual_strip import VirtualStrip
from models.color import Color, RED, BLACK
from models.config import AnimationTimings
from models.enums import TriggerResult
from services.alarm_service import AlarmService

SLOW = AnimationTimings(display_delay_s=5.0, step_hold_s=5.0, poll_interval_s=0.01)


@pytest.fixture
def service(engine):
    return AlarmService(engine)


@pytest.mark.asyncio
async def test_run_test_runs_diagnostic_suite(service, strip):
    assert await service.run_test() is TriggerResult.ACCEPTED

    assert [Color.from_packed(p) for p in strip.renders[0][1]] == [RED] * strip.led_count
    assert [Color.from_packed(p) for p in strip.get_frame()] == [BLACK] * strip.led_count
    assert not service.is_running()


@pytest.mark.asyncio
async def test_run_test_reports_device_failure(make_engine):
    service = AlarmService(make_engine(device=VirtualStrip(10, fail_on_render=1)))

    assert await service.run_test() is TriggerResult.FAILED
    assert service.status()["last_error"].startswith("DIAGNOSTIC_SUITE")


@pytest.mark.asyncio
async def test_manual_triggers_share_the_guard(make_engine):
    service = AlarmService(make_engine(timings=SLOW))

    assert service.trigger_alarm() is TriggerResult.ACCEPTED
    assert service.trigger_test() is TriggerResult.BUSY
    assert service.trigger_alarm() is TriggerResult.BUSY
    assert await service.run_test() is TriggerResult.BUSY

    assert service.status() == {"running": True, "current": "SUNRISE_ALARM", "last_error": None}

    assert service.cancel_running()
    assert await service.wait_idle(timeout=1.0)
    assert service.status()["running"] is False
    assert service.status()["current"] is None


@pytest.mark.asyncio
async def test_cancel_when_idle(service):
    assert service.cancel_running() is False


@pytest.mark.asyncio
async def test_stop_alarm_only_cancels_sunrise(make_engine):
    engine = make_engine(timings=SLOW)
    service = AlarmService(engine)

    service.trigger_test()
    assert service.stop_alarm_if_active() is False
    assert not engine.guard.token.cancelled
    engine.cancel()
    await engine.wait_idle(timeout=1.0)

    assert service.start_alarm_if_needed() is TriggerResult.ACCEPTED
    assert service.stop_alarm_if_active() is True
    assert await service.wait_idle(timeout=1.0)


@pytest.mark.asyncio
async def test_stop_alarm_when_idle(service):
    assert service.stop_alarm_if_active() is False
