"""
Lifecycle subsystem
-------------------

Graceful shutdown plus task tracking. Handlers live in lifecycle.handlers:
    from lifecycle import ShutdownCoordinator, create_tracked_task
    from lifecycle.handlers import LEDShutdownHandler
"""

from .shutdown_coordinator import ShutdownCoordinator
from .shutdown_protocol import IShutdownHandler
from .task_registry import TaskRegistry, TaskCategory, create_tracked_task

__all__ = [
    "ShutdownCoordinator",
    "IShutdownHandler",
    "TaskRegistry",
    "TaskCategory",
    "create_tracked_task",
]
