import asyncio
import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from animations.engine import AnimationEngine
from engine.run_state import RunStateGuard
from hardware.led.virtual_strip import VirtualStrip
from lifecycle.task_registry import TaskRegistry
from models.config import AnimationTimings
from models.enums import LogLevel
from utils.logger import configure_logger

configure_logger(LogLevel.WARN, use_colors=False)


FAST_TIMINGS = AnimationTimings(
    display_delay_s=0.01,
    scan_hold_s=0.001,
    ramp_step=25,
    ramp_ceiling=250,
    step_hold_s=0.02,
    full_hold_s=0.05,
    poll_interval_s=0.01,
)


class FakeRainSource:
    """Rain probability source with a canned answer, optional delay or error."""

    def __init__(self, probability: int = 0, delay: float = 0.0, error: Exception = None):
        self.probability = probability
        self.delay = delay
        self.error = error
        self.calls = 0

    async def get_rain_probability(self) -> int:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.probability


@pytest.fixture(autouse=True)
def fresh_task_registry():
    TaskRegistry.reset()
    yield
    TaskRegistry.reset()


@pytest.fixture
def timings():
    return FAST_TIMINGS


@pytest.fixture
def strip():
    """30-pixel virtual strip"""
    return VirtualStrip(30)


@pytest.fixture
def guard():
    return RunStateGuard()


@pytest.fixture
def rain_source_factory():
    return FakeRainSource


@pytest.fixture
def make_engine(strip, guard, timings):
    def _make(rain_source=None, device=None, **overrides):
        return AnimationEngine(
            device=device or strip,
            guard=guard,
            timings=overrides.get("timings", timings),
            baseline_brightness=overrides.get("baseline_brightness", 200),
            rain_source=rain_source,
            overlay_pixels=overrides.get("overlay_pixels", 5),
            weather_timeout_s=overrides.get("weather_timeout_s", 1.0),
        )
    return _make


@pytest.fixture
def engine(make_engine):
    return make_engine()
