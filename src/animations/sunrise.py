"""
Sunrise Alarm

White base frame faded in from brightness 0 in fixed steps, each step held
for step_hold_s, then held at the ceiling for full_hold_s, then off.

Every hold is polled at poll_interval_s, so a cancel takes effect (strip
dark) within one poll interval wherever the routine is.
"""

from animations.base import BaseAnimation
from animations.rain_overlay import RainOverlay
from engine.pixel_ops import fill_strip
from models.color import WHITE
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ALARM)


class SunriseAlarmAnimation(BaseAnimation):

    base_color = WHITE

    def ramp_levels(self):
        step = self.timings.ramp_step
        return list(range(step, self.timings.ramp_ceiling + 1, step))

    async def run(self) -> None:
        fill_strip(self.device, self.base_color)
        self.device.set_brightness(0)
        self.render()

        overlay = self._start_overlay()
        completed = False
        try:
            if await self._ramp():
                return
            log.info("Sunrise reached full brightness", hold_s=self.timings.full_hold_s)
            if await self.hold(self.timings.full_hold_s):
                log.info("Sunrise cancelled during full hold")
                return
            completed = True
        finally:
            if overlay is not None:
                await overlay.settle(discard=not completed)
            if completed:
                self.device.set_brightness(0)
                self.render()
                log.info("Sunrise alarm complete")
            else:
                self.blackout()

    async def _ramp(self) -> bool:
        """Step brightness up to the ceiling. True if cancelled."""
        for level in self.ramp_levels():
            if self.cancelled:
                log.info("Sunrise cancelled", brightness=level)
                return True
            self.device.set_brightness(level)
            self.render()
            log.debug("Sunrise step", brightness=level)
            if await self.hold(self.timings.step_hold_s):
                log.info("Sunrise cancelled", brightness=level)
                return True
        return False

    def _start_overlay(self):
        if self.ctx.rain_source is None:
            return None
        overlay = RainOverlay(
            device=self.device,
            token=self.token,
            source=self.ctx.rain_source,
            base_color=self.base_color,
            overlay_pixels=self.ctx.overlay_pixels,
            timeout_s=self.ctx.weather_timeout_s,
        )
        overlay.start()
        return overlay
