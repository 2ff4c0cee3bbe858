"""
Error taxonomy for the wake-up light

DeviceInitError    fatal, raised while opening the strip at startup
DeviceWriteError   per-animation, raised by set_pixel/render/set_brightness
DeviceFailure      AnimationError raised at the animation boundary
WeatherUnavailable internal to the weather client, never leaves it

"Already running" is not an error: it is TriggerResult.BUSY.
"""

from typing import Optional


class DeviceError(Exception):
    """Base class for LED device errors"""


class DeviceInitError(DeviceError):
    """Strip could not be opened (wrong pin, no permissions, no DMA)"""


class DeviceWriteError(DeviceError):
    """Buffer write or render failed on an opened strip"""


class AnimationError(Exception):
    """Base class for errors surfaced by AnimationEngine.run()"""


class DeviceFailure(AnimationError):
    """A device error aborted the running animation"""

    def __init__(self, kind: str, cause: Optional[DeviceError] = None):
        self.kind = kind
        self.cause = cause
        message = f"{kind} aborted by device failure"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class WeatherUnavailable(Exception):
    """Forecast endpoint unreachable or returned unusable data"""
