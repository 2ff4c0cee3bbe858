# lifecycle/handlers/all_tasks_cancellation_handler.py

import asyncio
from typing import List, Optional

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class AllTasksCancellationHandler(IShutdownHandler):
    """
    Cancels every tracked task still running, except the task executing
    the shutdown and any explicitly excluded ones, then waits for them.

    Priority: 30
    """

    def __init__(self, exclude_tasks: Optional[List[asyncio.Task]] = None):
        self.exclude_tasks = exclude_tasks or []

    @property
    def shutdown_priority(self) -> int:
        return 30

    async def shutdown(self) -> None:
        current = asyncio.current_task()
        exclude = [current] if current else []
        exclude.extend(self.exclude_tasks)

        tasks = TaskRegistry.instance().get_tasks_for_shutdown(exclude=exclude)
        if not tasks:
            log.debug("No background tasks left to cancel")
            return

        log.info(f"Cancelling {len(tasks)} background tasks")
        for t in tasks:
            t.cancel()

        await asyncio.gather(*tasks, return_exceptions=True)
        log.info("Background tasks cancelled")
