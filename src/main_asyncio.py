"""
main_asyncio.py - Application entry point for the sunrise light
----------------------------------------------------------------

Responsible for:
- loading configuration and opening the LED strip
- wiring dependencies (Dependency Injection)
- starting the scheduler and the API server on one event loop
- graceful shutdown on Ctrl+C / SIGTERM or a critical task failure
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (important for Raspberry Pi)
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio

from animations.engine import AnimationEngine
from api.dependencies import set_service_container
from api.main import create_app
from engine.run_state import RunStateGuard
from hardware.led.strip_factory import create_strip
from lifecycle import ShutdownCoordinator
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    AllTasksCancellationHandler,
    AnimationShutdownHandler,
    APIServerShutdownHandler,
    LEDShutdownHandler,
    SchedulerShutdownHandler,
)
from lifecycle.task_registry import create_tracked_task, TaskCategory, TaskRegistry
from managers.config_manager import ConfigManager
from models.errors import DeviceInitError
from services.alarm_service import AlarmService
from services.schedule_evaluator import ScheduleEvaluator
from services.schedule_service import ScheduleService
from services.service_container import ServiceContainer
from services.weather_service import WeatherService
from utils.logger import get_logger, configure_logger, LogCategory

log = get_logger().for_category(LogCategory.SYSTEM)


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main() -> int:
    """Main async entry point. Returns the process exit status."""

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================
    config_manager = ConfigManager()
    config = config_manager.load()
    configure_logger(config.logging.level, config.logging.use_colors)

    log.info("Starting sunrise light...")

    # ========================================================================
    # 2. HARDWARE
    # ========================================================================
    try:
        device = create_strip(config.strip)
    except DeviceInitError as e:
        log.error(f"Cannot open LED strip: {e}", gpio=config.strip.gpio_pin)
        return 1

    # ========================================================================
    # 3. SERVICES
    # ========================================================================
    weather_service = WeatherService(config.weather) if config.weather.enabled else None

    guard = RunStateGuard()
    engine = AnimationEngine(
        device=device,
        guard=guard,
        timings=config.animation,
        baseline_brightness=config.strip.brightness,
        rain_source=weather_service,
        overlay_pixels=config.weather.overlay_pixels,
        weather_timeout_s=config.weather.timeout_s,
    )
    alarm_service = AlarmService(engine)

    schedule_service = ScheduleService(config_manager.resolve_path(config.scheduler.schedule_file))
    await schedule_service.load()

    evaluator = ScheduleEvaluator(
        schedules=schedule_service,
        alarm_service=alarm_service,
        tick_interval_s=config.scheduler.tick_interval_s,
    )

    services = ServiceContainer(
        config=config,
        device=device,
        guard=guard,
        engine=engine,
        alarm_service=alarm_service,
        schedule_service=schedule_service,
        weather_service=weather_service,
        evaluator=evaluator,
    )
    set_service_container(services)
    log.info("Service container registered with API")

    # ========================================================================
    # 4. BACKGROUND TASKS
    # ========================================================================
    evaluator.start()

    app = create_app(docs_enabled=config.api.docs_enabled, static_dir=config.api.static_dir)
    api_server = APIServerWrapper(app, host=config.api.host, port=config.api.port)
    create_tracked_task(
        api_server.serve(),
        category=TaskCategory.API,
        description="FastAPI/Uvicorn Server"
    )

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================
    coordinator = ShutdownCoordinator()
    coordinator.register(SchedulerShutdownHandler(evaluator))
    coordinator.register(AnimationShutdownHandler(engine, grace_s=config.animation.poll_interval_s * 3))
    coordinator.register(APIServerShutdownHandler(api_server))
    coordinator.register(AllTasksCancellationHandler())
    coordinator.register(LEDShutdownHandler(device))

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("🏁 Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()

    if weather_service is not None:
        await weather_service.close()

    log.info(TaskRegistry.instance().summary())
    log.info("👋 Sunrise light shut down cleanly.")
    return 0


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def run() -> None:
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        status = 0
    sys.exit(status)


if __name__ == "__main__":
    run()
