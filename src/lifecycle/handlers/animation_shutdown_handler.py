from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from animations.engine import AnimationEngine

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AnimationShutdownHandler(IShutdownHandler):
    """
    Cancels the running animation and waits for it to settle, so the
    sunrise routine gets to blank the strip itself.

    Priority: 130 (after the scheduler, before LED cleanup)
    """

    def __init__(self, engine: "AnimationEngine", grace_s: float = 3.0):
        self.engine = engine
        self.grace_s = grace_s

    @property
    def shutdown_priority(self) -> int:
        return 130

    async def shutdown(self) -> None:
        if not self.engine.is_running():
            log.debug("No animation running")
            return
        log.info("Stopping animation...", kind=self.engine.current_kind.name if self.engine.current_kind else "?")
        await self.engine.stop(timeout=self.grace_s)
        log.debug("Animation stopped")
