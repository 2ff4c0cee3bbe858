"""
Color Fill / Clear

Whole-strip static frames: one render each, the fill then held for the
display delay.
"""

from animations.base import BaseAnimation, clear_strip
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ANIMATION)


class ColorFillAnimation(BaseAnimation):
    """Write the request color to every pixel, render, hold display_delay_s."""

    async def run(self) -> None:
        color = self.request.color
        log.info("Color fill", color=str(color), pixels=self.pixel_count)
        self.fill(color)
        self.render()
        if await self.hold(self.timings.display_delay_s):
            log.debug("Color fill hold interrupted")


class ClearAnimation(BaseAnimation):
    """Fill black and render, no hold."""

    async def run(self) -> None:
        log.debug("Clearing strip")
        clear_strip(self.device)
