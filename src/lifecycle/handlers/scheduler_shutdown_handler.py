from __future__ import annotations
from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from services.schedule_evaluator import ScheduleEvaluator

log = get_logger().for_category(LogCategory.SHUTDOWN)


class SchedulerShutdownHandler(IShutdownHandler):
    """
    Stops the schedule tick loop so no new alarm starts mid-shutdown.

    Priority: 140 (first)
    """

    def __init__(self, evaluator: "ScheduleEvaluator"):
        self.evaluator = evaluator

    @property
    def shutdown_priority(self) -> int:
        return 140

    async def shutdown(self) -> None:
        log.info("Stopping scheduler...")
        await self.evaluator.stop()
