"""
Rain Overlay

Recolors the trailing pixels of the strip blue when rain is expected.

The probability query runs as its own task, started after the base frame is
already on the strip, so a slow weather source never delays the alarm. The
owning routine settles the task before it blanks the strip: joined on a
clean finish, cancelled (result discarded) when the run was cancelled.
"""

import asyncio
from typing import List, Optional, Protocol

from engine.cancellation import CancellationToken
from engine.pixel_ops import set_pixel_color
from hardware.led.strip_interface import IPhysicalStrip
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.color import Color, BLUE
from models.errors import DeviceError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.WEATHER)


class RainProbabilitySource(Protocol):
    """Anything that can answer "how likely is rain today" as 0-100."""

    async def get_rain_probability(self) -> int:
        ...


def apply_rain_overlay(base_color: Color, led_count: int, probability: int,
                       overlay_pixels: int) -> List[Color]:
    """
    Per-pixel colors for a strip of `led_count` filled with `base_color`.

    probability > 0 forces [max(0, led_count - overlay_pixels), led_count)
    to BLUE, everything else stays at base_color.
    """
    colors = [base_color] * led_count
    if probability <= 0:
        return colors
    for i in range(max(0, led_count - overlay_pixels), led_count):
        colors[i] = BLUE
    return colors


class RainOverlay:
    """One overlay refinement, bound to a single run's token."""

    def __init__(
        self,
        device: IPhysicalStrip,
        token: CancellationToken,
        source: RainProbabilitySource,
        base_color: Color,
        overlay_pixels: int,
        timeout_s: float,
    ):
        self.device = device
        self.token = token
        self.source = source
        self.base_color = base_color
        self.overlay_pixels = overlay_pixels
        self.timeout_s = timeout_s
        self.probability: Optional[int] = None
        self._task: Optional[asyncio.Task] = None

    def start(self) -> asyncio.Task:
        self._task = create_tracked_task(
            self._refine(),
            category=TaskCategory.WEATHER,
            description=f"Rain overlay (run {self.token.run_id})",
        )
        return self._task

    async def _refine(self) -> bool:
        """Query once and re-render the trailing pixels. True if the overlay was drawn."""
        try:
            probability = await asyncio.wait_for(
                self.source.get_rain_probability(), self.timeout_s
            )
        except asyncio.TimeoutError:
            log.warn("Rain probability query timed out", timeout_s=self.timeout_s)
            return False
        except Exception as ex:
            log.warn("Rain probability unavailable", error=str(ex))
            return False

        self.probability = probability

        if self.token.cancelled:
            log.debug("Run cancelled before overlay, discarding", probability=probability)
            return False

        if probability <= 0:
            log.info("No rain expected, overlay skipped")
            return False

        colors = apply_rain_overlay(
            self.base_color, self.device.led_count, probability, self.overlay_pixels
        )
        start = max(0, self.device.led_count - self.overlay_pixels)
        for i in range(start, self.device.led_count):
            set_pixel_color(self.device, i, colors[i])
        self.device.render()

        log.info("Rain overlay applied", probability=f"{probability}%", pixels=self.device.led_count - start)
        return True

    async def settle(self, discard: bool) -> None:
        """
        Join the refinement, or cancel it when `discard` is set.

        Device errors from the overlay render are logged here; the owning
        routine's own renders surface a broken device.
        """
        task = self._task
        if task is None:
            return

        if discard and not task.done():
            task.cancel()

        outcome, = await asyncio.gather(task, return_exceptions=True)
        if isinstance(outcome, asyncio.CancelledError):
            log.debug("Rain overlay discarded")
        elif isinstance(outcome, DeviceError):
            log.error("Rain overlay render failed", error=str(outcome))
        elif isinstance(outcome, BaseException):
            log.error("Rain overlay failed", error=repr(outcome))
