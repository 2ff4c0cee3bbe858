"""Domain models - animation requests and schedules"""

from models.domain.animation import (
    AnimationRequest,
    ColorFill,
    PixelScan,
    BrightnessRamp,
    SunriseAlarm,
    Clear,
    DiagnosticSuite,
)
from models.domain.schedule import DaySchedule, WEEKDAYS, default_schedules

__all__ = [
    "AnimationRequest",
    "ColorFill",
    "PixelScan",
    "BrightnessRamp",
    "SunriseAlarm",
    "Clear",
    "DiagnosticSuite",
    "DaySchedule",
    "WEEKDAYS",
    "default_schedules",
]
