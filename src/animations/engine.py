"""
Animation Engine

Runs one routine at a time against the LED strip. Admission goes through the
RunStateGuard; each accepted request runs as its own tracked task and the
guard is released on every exit path.
"""

import asyncio
from typing import Dict, Optional, Type

from animations.base import AnimationContext, BaseAnimation
from animations.brightness_ramp import BrightnessRampAnimation
from animations.color_fill import ColorFillAnimation, ClearAnimation
from animations.diagnostic import DiagnosticSuiteAnimation
from animations.pixel_scan import PixelScanAnimation
from animations.rain_overlay import RainProbabilitySource
from animations.sunrise import SunriseAlarmAnimation
from engine.cancellation import CancellationToken
from engine.run_state import RunStateGuard
from hardware.led.strip_interface import IPhysicalStrip
from lifecycle.task_registry import create_tracked_task, TaskCategory
from models.config import AnimationTimings
from models.domain.animation import AnimationRequest
from models.enums import AnimationKind, AcquireResult, TriggerResult
from models.errors import AnimationError, DeviceError, DeviceFailure
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)


def _build_animation_registry() -> Dict[AnimationKind, Type[BaseAnimation]]:
    """Routine class per request kind"""
    return {
        AnimationKind.COLOR_FILL: ColorFillAnimation,
        AnimationKind.PIXEL_SCAN: PixelScanAnimation,
        AnimationKind.BRIGHTNESS_RAMP: BrightnessRampAnimation,
        AnimationKind.SUNRISE_ALARM: SunriseAlarmAnimation,
        AnimationKind.CLEAR: ClearAnimation,
        AnimationKind.DIAGNOSTIC_SUITE: DiagnosticSuiteAnimation,
    }


class AnimationEngine:
    """
    Single-writer animation runner

    • submit()  - acquire + spawn a tracked task, returns immediately
    • execute() - acquire + run inline, returns when the run has settled
    • run()     - the run itself, for callers that already hold the guard

    Device errors abort the routine, blank the strip (best effort) and
    surface as DeviceFailure; they never escape a submitted task.
    """

    ANIMATIONS: Dict[AnimationKind, Type[BaseAnimation]] = _build_animation_registry()

    def __init__(
        self,
        device: IPhysicalStrip,
        guard: RunStateGuard,
        timings: AnimationTimings,
        baseline_brightness: int = 255,
        rain_source: Optional[RainProbabilitySource] = None,
        overlay_pixels: int = 20,
        weather_timeout_s: float = 10.0,
    ):
        self.device = device
        self.guard = guard
        self.timings = timings
        self.baseline_brightness = baseline_brightness
        self.rain_source = rain_source
        self.overlay_pixels = overlay_pixels
        self.weather_timeout_s = weather_timeout_s

        self.current_request: Optional[AnimationRequest] = None
        self.last_error: Optional[str] = None
        self._task: Optional[asyncio.Task] = None

    # ============================================================
    # Admission
    # ============================================================

    def submit(self, request: AnimationRequest) -> TriggerResult:
        """Start `request` in the background unless something is already running."""
        if self.guard.try_acquire(request.kind.name) is AcquireResult.BUSY:
            return TriggerResult.BUSY

        token = self.guard.token
        # Visible to status checks before the task gets its first turn
        self.current_request = request
        self._task = create_tracked_task(
            self._run_detached(request, token),
            category=TaskCategory.ANIMATION,
            description=f"{request.kind.name} (run {token.run_id})",
        )
        log.info(f"Started {request.kind.name}", run=token.run_id)
        return TriggerResult.ACCEPTED

    async def execute(self, request: AnimationRequest) -> TriggerResult:
        """Run `request` to the end in the caller's task."""
        if self.guard.try_acquire(request.kind.name) is AcquireResult.BUSY:
            return TriggerResult.BUSY
        try:
            await self.run(request, self.guard.token)
        except AnimationError:
            return TriggerResult.FAILED
        return TriggerResult.ACCEPTED

    async def _run_detached(self, request: AnimationRequest, token: CancellationToken) -> None:
        try:
            await self.run(request, token)
        except AnimationError:
            # Already logged and recorded in last_error
            pass

    # ============================================================
    # Run
    # ============================================================

    def create_animation(self, request: AnimationRequest, token: CancellationToken) -> BaseAnimation:
        anim_class = self.ANIMATIONS.get(request.kind)
        if anim_class is None:
            raise ValueError(f"Animation {request.kind} not registered")
        ctx = AnimationContext(
            device=self.device,
            token=token,
            timings=self.timings,
            baseline_brightness=self.baseline_brightness,
            rain_source=self.rain_source,
            overlay_pixels=self.overlay_pixels,
            weather_timeout_s=self.weather_timeout_s,
        )
        return anim_class(request, ctx)

    async def run(self, request: AnimationRequest, token: CancellationToken) -> None:
        """
        Run one routine. The caller must hold the guard with `token`;
        it is released here whatever happens.

        Raises:
            DeviceFailure: a device write or render failed
        """
        self.current_request = request
        kind = request.kind.name
        try:
            anim = self.create_animation(request, token)
            self.device.set_brightness(self.baseline_brightness)
            await anim.run()
            if token.cancelled:
                log.info(f"{kind} cancelled", run=token.run_id, reason=token.reason)
            else:
                log.info(f"{kind} finished", run=token.run_id)
        except DeviceError as ex:
            self.last_error = f"{kind}: {ex}"
            log.error(f"{kind} aborted by device error", run=token.run_id, error=str(ex))
            self._fail_safe_off()
            raise DeviceFailure(kind, ex) from ex
        finally:
            if self.guard.token is token:
                self.current_request = None
            self.guard.release(token)

    def _fail_safe_off(self) -> None:
        try:
            self.device.set_brightness(0)
            self.device.render()
        except DeviceError as ex:
            log.error("Fail-safe blackout failed", error=str(ex))

    # ============================================================
    # Control
    # ============================================================

    @property
    def current_kind(self) -> Optional[AnimationKind]:
        request = self.current_request
        return request.kind if request is not None else None

    def is_running(self) -> bool:
        return self.guard.is_running()

    def cancel(self, reason: str = "requested") -> bool:
        return self.guard.request_cancel(reason)

    async def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait for the last submitted run to settle. False on timeout."""
        task = self._task
        if task is None or task.done():
            return True
        done, _ = await asyncio.wait({task}, timeout=timeout)
        return bool(done)

    async def stop(self, timeout: Optional[float] = None) -> None:
        """Cancel the current run and wait for it, escalating to task.cancel() on timeout."""
        self.cancel("shutdown")
        if await self.wait_idle(timeout):
            return
        task = self._task
        if task is not None and not task.done():
            log.warn("Animation did not stop in time, cancelling task")
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
