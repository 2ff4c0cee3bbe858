"""
Schedule Evaluator

Ticks every few seconds, compares the clock against today's DaySchedule and
crosses into the AlarmService only when the desired alarm state changes.
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional

from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.domain.schedule import DaySchedule, WEEKDAYS
from models.enums import AlarmDecision, TriggerResult
from services.alarm_service import AlarmService
from services.schedule_service import ScheduleService
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SCHEDULE)


def evaluate(schedule: Optional[DaySchedule], minute: int, active: bool) -> AlarmDecision:
    """
    START    inside an enabled window, alarm not active yet
    CONTINUE inside an enabled window, alarm already active
    STOP     outside the window (or disabled / no schedule), alarm active
    IDLE     outside the window, nothing active
    """
    in_window = schedule is not None and schedule.enabled and schedule.contains(minute)
    if in_window:
        return AlarmDecision.CONTINUE if active else AlarmDecision.START
    return AlarmDecision.STOP if active else AlarmDecision.IDLE


class ScheduleEvaluator:
    """
    `alarm_active` latches once an alarm has been accepted and stays set
    until the window ends, so an alarm that finished early is not restarted
    inside the same window. A BUSY start is simply retried next tick.
    """

    def __init__(
        self,
        schedules: ScheduleService,
        alarm_service: AlarmService,
        tick_interval_s: float = 5.0,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.schedules = schedules
        self.alarm_service = alarm_service
        self.tick_interval_s = tick_interval_s
        self.clock = clock
        self.alarm_active = False
        self._stop_event = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    def tick(self, now: Optional[datetime] = None) -> AlarmDecision:
        now = now or self.clock()
        day = WEEKDAYS[now.weekday()]
        minute = now.hour * 60 + now.minute

        decision = evaluate(self.schedules.get(day), minute, self.alarm_active)

        if decision is AlarmDecision.START:
            if self.alarm_service.start_alarm_if_needed() is TriggerResult.ACCEPTED:
                self.alarm_active = True
                log.info("Alarm window open", day=day, minute=minute)
        elif decision is AlarmDecision.STOP:
            self.alarm_service.stop_alarm_if_active()
            self.alarm_active = False
            log.info("Alarm window closed", day=day, minute=minute)

        return decision

    async def run(self) -> None:
        log.info("Scheduler started", tick_s=self.tick_interval_s)
        while not self._stop_event.is_set():
            try:
                self.tick()
            except Exception as e:
                log.error(f"Schedule tick failed: {e}", exc_info=True)
            try:
                await asyncio.wait_for(self._stop_event.wait(), timeout=self.tick_interval_s)
            except asyncio.TimeoutError:
                pass
        log.info("Scheduler stopped")

    def start(self) -> asyncio.Task:
        self._stop_event.clear()
        self._task = create_tracked_task(
            self.run(), category=TaskCategory.SCHEDULER, description="Schedule evaluator"
        )
        return self._task

    async def stop(self) -> None:
        self._stop_event.set()
        if self._task is not None:
            await asyncio.gather(self._task, return_exceptions=True)
            self._task = None
