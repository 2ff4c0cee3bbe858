from __future__ import annotations

from hardware.led.strip_interface import IPhysicalStrip
from lifecycle.shutdown_protocol import IShutdownHandler
from models.errors import DeviceError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class LEDShutdownHandler(IShutdownHandler):
    """
    Blanks the strip and releases the driver.

    Runs after every task that could write to the strip has stopped.

    Priority: 10 (last)
    """

    def __init__(self, device: IPhysicalStrip):
        self.device = device

    @property
    def shutdown_priority(self) -> int:
        return 10

    async def shutdown(self) -> None:
        log.info("Clearing LEDs...")
        try:
            self.device.shutdown()
        except DeviceError as e:
            log.error(f"Error releasing LED strip: {e}")
            return
        log.info("LED strip released")
