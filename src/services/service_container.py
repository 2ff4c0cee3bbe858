"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from typing import Optional

from animations.engine import AnimationEngine
from engine.run_state import RunStateGuard
from hardware.led.strip_interface import IPhysicalStrip
from models.config import AppConfig
from services.alarm_service import AlarmService
from services.schedule_evaluator import ScheduleEvaluator
from services.schedule_service import ScheduleService
from services.weather_service import WeatherService


@dataclass
class ServiceContainer:
    """
    Everything the API routes and the lifecycle handlers need, built once in
    main_asyncio.py (or a test fixture) and handed to set_service_container().

    Usage:
        @router.get("/schedules")
        async def list_schedules(services: ServiceContainer = Depends(get_service_container)):
            return services.schedule_service.all()
    """

    config: AppConfig
    device: IPhysicalStrip
    guard: RunStateGuard
    engine: AnimationEngine
    alarm_service: AlarmService
    schedule_service: ScheduleService
    weather_service: Optional[WeatherService] = None
    evaluator: Optional[ScheduleEvaluator] = None
