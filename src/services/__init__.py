"""Services layer"""

from .alarm_service import AlarmService
from .schedule_service import ScheduleService
from .weather_service import WeatherService

__all__ = [
    "AlarmService",
    "ScheduleService",
    "WeatherService",
]
