"""
Pixel Scan

Walks a single lit pixel from index 0 to N-1. Used to spot dead LEDs and
broken data lines.
"""

from animations.base import BaseAnimation
from engine.pixel_ops import set_pixel_color
from models.color import BLACK
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ANIMATION)


class PixelScanAnimation(BaseAnimation):
    """
    For each index: light it, render, hold scan_hold_s, set it black, render.

    Cancellation is checked before each index. A scan stopped at index i
    has pixels [0, i) black and has never touched indices above i; the
    strip is left as-is for the caller to clear.
    """

    async def run(self) -> None:
        color = self.request.color
        log.info("Pixel scan", color=str(color), pixels=self.pixel_count)

        for i in range(self.pixel_count):
            if self.cancelled:
                log.info("Pixel scan cancelled", index=i)
                return

            set_pixel_color(self.device, i, color)
            self.render()
            await self.hold(self.timings.scan_hold_s)
            set_pixel_color(self.device, i, BLACK)
            self.render()

        log.debug("Pixel scan complete")
