"""
Diagnostic Suite

Manual hardware check: ColorFill(red) -> PixelScan(red) -> Clear.
"""

from animations.base import BaseAnimation
from animations.color_fill import ColorFillAnimation, ClearAnimation
from animations.pixel_scan import PixelScanAnimation
from models.color import RED
from models.domain.animation import ColorFill, PixelScan, Clear
from utils.logger import LogCategory, get_category_logger

log = get_category_logger(LogCategory.ANIMATION)


class DiagnosticSuiteAnimation(BaseAnimation):
    """
    Runs the steps in order, checking for cancellation between them.

    The strip is cleared at the end even after a cancel, so a stopped scan
    never leaves pixels lit.
    """

    def steps(self):
        return [
            ColorFillAnimation(ColorFill(RED), self.ctx),
            PixelScanAnimation(PixelScan(RED), self.ctx),
        ]

    async def run(self) -> None:
        for step in self.steps():
            if self.cancelled:
                log.info("Diagnostic suite cancelled", before=step.name)
                break
            await step.run()

        await ClearAnimation(Clear(), self.ctx).run()
        log.info("Diagnostic suite finished", cancelled=self.cancelled)
