"""
Shutdown handler protocol for component-based graceful shutdown.

Each component that needs cleanup (scheduler, animation engine, API server,
LED device) is wrapped in a handler the ShutdownCoordinator calls in
priority order.
"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Protocol for components that need graceful shutdown.

    Example:
        class LEDShutdownHandler:
            @property
            def shutdown_priority(self) -> int:
                return 10  # after every writer has stopped

            async def shutdown(self) -> None:
                self.device.shutdown()
    """

    @property
    def shutdown_priority(self) -> int:
        """
        Higher priority shuts down earlier.
        """
        ...

    async def shutdown(self) -> None:
        """
        Called during coordinated shutdown.
        """
        ...
