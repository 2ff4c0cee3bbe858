"""
Brightness Ramp

Steps the whole strip (white) through a list of brightness levels.
"""

from animations.base import BaseAnimation
from models.color import WHITE
from models.errors import DeviceError
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ANIMATION)


class BrightnessRampAnimation(BaseAnimation):
    """
    For each level: set brightness, fill white, render, hold display_delay_s.

    The baseline brightness is restored however the loop exits.
    """

    async def run(self) -> None:
        levels = self.request.levels
        log.info("Brightness ramp", levels=list(levels))
        try:
            for level in levels:
                if self.cancelled:
                    log.info("Brightness ramp cancelled", brightness=level)
                    return
                self.device.set_brightness(level)
                self.fill(WHITE)
                self.render()
                if await self.hold(self.timings.display_delay_s):
                    log.info("Brightness ramp cancelled", brightness=level)
                    return
        finally:
            self._restore_baseline()

    def _restore_baseline(self) -> None:
        try:
            self.device.set_brightness(self.ctx.baseline_brightness)
        except DeviceError as ex:
            log.error("Failed to restore baseline brightness", error=str(ex))
