"""
Enums for the wake-up light engine
"""

from enum import Enum, auto


class AnimationKind(Enum):
    """Tag of an AnimationRequest variant"""
    COLOR_FILL = auto()
    PIXEL_SCAN = auto()
    BRIGHTNESS_RAMP = auto()
    SUNRISE_ALARM = auto()
    CLEAR = auto()
    DIAGNOSTIC_SUITE = auto()


class AcquireResult(Enum):
    """Outcome of RunStateGuard.try_acquire()"""
    GRANTED = auto()
    BUSY = auto()


class TriggerResult(Enum):
    """Outcome of an engine entry point (HTTP trigger or scheduler)"""
    ACCEPTED = auto()   # Run admitted (and finished OK when awaited)
    BUSY = auto()       # Another animation holds the strip
    FAILED = auto()     # Run admitted but aborted by a device failure


class AlarmDecision(Enum):
    """
    Per-tick decision of the schedule evaluator

    START: inside window, alarm not active yet
    CONTINUE: inside window, alarm already active (no action)
    STOP: outside window or disabled day, alarm was active
    IDLE: outside window, nothing running (no action)
    """
    START = auto()
    CONTINUE = auto()
    STOP = auto()
    IDLE = auto()


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # LED device init, render failures
    ANIMATION = auto()   # Animation start/stop/cancel
    ALARM = auto()       # Trigger boundary (test, sunrise)
    SCHEDULE = auto()    # Timetable persistence and evaluator ticks
    WEATHER = auto()     # Rain probability queries
    API = auto()
    SYSTEM = auto()      # Startup, fatal errors
    SHUTDOWN = auto()
    TASK = auto()

    GENERAL = auto()    # Default general category
