"""
Base Animation Class

All routines inherit from BaseAnimation and implement the async run() method.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, TYPE_CHECKING

from engine.cancellation import CancellationToken
from engine import pixel_ops
from hardware.led.strip_interface import IPhysicalStrip
from models.color import Color, BLACK
from models.config import AnimationTimings
from models.errors import DeviceError
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from animations.rain_overlay import RainProbabilitySource

log = get_logger().for_category(LogCategory.ANIMATION)


@dataclass
class AnimationContext:
    """Everything a routine may touch during one run"""
    device: IPhysicalStrip
    token: CancellationToken
    timings: AnimationTimings
    baseline_brightness: int = 255
    rain_source: Optional["RainProbabilitySource"] = None
    overlay_pixels: int = 20
    weather_timeout_s: float = 10.0


class BaseAnimation:
    """
    Base class for all LED routines

    IMPORTANT:
    - One instance = ONE run of ONE request.
    - The run owns the device for its whole duration (RunStateGuard).
    - Device errors (DeviceWriteError) propagate out of run(); the engine
      turns them into DeviceFailure.
    - Cancellation is cooperative: routines poll `cancelled` or wait via
      hold(), which never sleeps longer than the poll interval at a time.
    """

    def __init__(self, request, ctx: AnimationContext):
        self.request = request
        self.ctx = ctx

    # ------------------------------------------------------------
    # Runtime
    # ------------------------------------------------------------

    async def run(self) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------
    # Context helpers
    # ------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.request.kind.name

    @property
    def device(self) -> IPhysicalStrip:
        return self.ctx.device

    @property
    def token(self) -> CancellationToken:
        return self.ctx.token

    @property
    def timings(self) -> AnimationTimings:
        return self.ctx.timings

    @property
    def cancelled(self) -> bool:
        return self.ctx.token.cancelled

    @property
    def pixel_count(self) -> int:
        return self.ctx.device.led_count

    # ------------------------------------------------------------
    # Drawing helpers
    # ------------------------------------------------------------

    def fill(self, color: Color) -> None:
        pixel_ops.fill_strip(self.device, color)

    def render(self) -> None:
        self.device.render()

    def blackout(self) -> None:
        """Best-effort brightness 0 + render; never raises."""
        try:
            self.device.set_brightness(0)
            self.device.render()
        except DeviceError as ex:
            log.error(f"{self.name}: blackout failed", error=str(ex))

    async def hold(self, seconds: float) -> bool:
        """
        Hold the current frame for `seconds`, polling for cancellation.

        Waits in slices of at most poll_interval_s. Returns True if the run
        was cancelled (possibly before the hold even started).
        """
        poll = self.timings.poll_interval_s
        remaining = seconds
        while remaining > 0:
            chunk = min(poll, remaining) if poll > 0 else remaining
            if await self.token.wait(chunk):
                return True
            remaining -= chunk
        return self.token.cancelled


def clear_strip(device: IPhysicalStrip) -> None:
    """Fill black and render."""
    pixel_ops.fill_strip(device, BLACK)
    device.render()
