"""Animation request variants

Each request names one routine of the AnimationEngine. The `kind` tag
is what the engine dispatches on and what the status endpoint reports.
"""

from dataclasses import dataclass
from typing import Tuple, Union

from models.color import Color, RED
from models.enums import AnimationKind


@dataclass(frozen=True)
class ColorFill:
    color: Color = RED
    kind = AnimationKind.COLOR_FILL


@dataclass(frozen=True)
class PixelScan:
    color: Color = RED
    kind = AnimationKind.PIXEL_SCAN


@dataclass(frozen=True)
class BrightnessRamp:
    """levels: ascending brightness values (0-255)"""
    levels: Tuple[int, ...] = (25, 128, 255)
    kind = AnimationKind.BRIGHTNESS_RAMP

    def __post_init__(self):
        if any(not 0 <= level <= 255 for level in self.levels):
            raise ValueError(f"Brightness levels out of range 0-255: {self.levels}")


@dataclass(frozen=True)
class SunriseAlarm:
    kind = AnimationKind.SUNRISE_ALARM


@dataclass(frozen=True)
class Clear:
    kind = AnimationKind.CLEAR


@dataclass(frozen=True)
class DiagnosticSuite:
    """ColorFill(red) -> PixelScan(red) -> Clear"""
    kind = AnimationKind.DIAGNOSTIC_SUITE


AnimationRequest = Union[ColorFill, PixelScan, BrightnessRamp, SunriseAlarm, Clear, DiagnosticSuite]
