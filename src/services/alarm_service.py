"""Alarm Service - engine boundary for HTTP handlers and the schedule evaluator"""

from typing import Any, Dict, Optional

from animations.engine import AnimationEngine
from models.domain.animation import DiagnosticSuite, SunriseAlarm
from models.enums import AnimationKind, TriggerResult
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ALARM)


class AlarmService:
    """
    Every trigger goes through the engine's single guard, so a manual test,
    a manual alarm and a scheduled alarm can never overlap.
    """

    def __init__(self, engine: AnimationEngine):
        self.engine = engine

    # ------------------------------------------------------------------
    # Manual triggers
    # ------------------------------------------------------------------

    def trigger_test(self) -> TriggerResult:
        result = self.engine.submit(DiagnosticSuite())
        log.info(f"Test lights: {result.name}")
        return result

    async def run_test(self) -> TriggerResult:
        """Run the diagnostic suite and wait for it; FAILED on device error."""
        result = await self.engine.execute(DiagnosticSuite())
        log.info(f"Test lights finished: {result.name}")
        return result

    def trigger_alarm(self) -> TriggerResult:
        result = self.engine.submit(SunriseAlarm())
        log.info(f"Sunrise alarm: {result.name}", source="manual")
        return result

    def cancel_running(self) -> bool:
        return self.engine.cancel("manual")

    def is_running(self) -> bool:
        return self.engine.is_running()

    # ------------------------------------------------------------------
    # Scheduler entry points
    # ------------------------------------------------------------------

    def start_alarm_if_needed(self) -> TriggerResult:
        result = self.engine.submit(SunriseAlarm())
        if result is TriggerResult.ACCEPTED:
            log.info("Sunrise alarm started", source="scheduler")
        else:
            log.debug("Sunrise alarm deferred, strip busy")
        return result

    def stop_alarm_if_active(self) -> bool:
        """Cancel the running sunrise alarm. Other routines are left alone."""
        if self.engine.current_kind is not AnimationKind.SUNRISE_ALARM:
            return False
        stopped = self.engine.cancel("schedule window ended")
        if stopped:
            log.info("Sunrise alarm stopped", source="scheduler")
        return stopped

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def status(self) -> Dict[str, Any]:
        kind = self.engine.current_kind
        return {
            "running": self.engine.is_running(),
            "current": kind.name if kind else None,
            "last_error": self.engine.last_error,
        }

    async def wait_idle(self, timeout: Optional[float] = None) -> bool:
        return await self.engine.wait_idle(timeout)
