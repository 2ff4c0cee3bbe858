from .all_tasks_cancellation_handler import AllTasksCancellationHandler
from .animation_shutdown_handler import AnimationShutdownHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .led_shutdown_handler import LEDShutdownHandler
from .scheduler_shutdown_handler import SchedulerShutdownHandler

__all__ = [
    "AllTasksCancellationHandler",
    "AnimationShutdownHandler",
    "APIServerShutdownHandler",
    "LEDShutdownHandler",
    "SchedulerShutdownHandler",
]
