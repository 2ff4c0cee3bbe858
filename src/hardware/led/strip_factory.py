# strip_factory.py

from models.config import StripConfig
from runtime.runtime_info import RuntimeInfo
from hardware.led.strip_interface import IPhysicalStrip
from hardware.led.virtual_strip import VirtualStrip
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


def create_strip(config: StripConfig) -> IPhysicalStrip:
    """
    Open the LED strip described by config.

    On a Raspberry Pi with rpi_ws281x installed this opens the real driver
    and lets DeviceInitError propagate (fatal for the caller). Anywhere else,
    or with `virtual: true`, an in-memory VirtualStrip is returned.
    """
    if config.virtual:
        log.info("Using virtual strip (forced by config)", count=config.led_count)
        return VirtualStrip(config.led_count, brightness=config.brightness)

    if RuntimeInfo.is_raspberry_pi() and RuntimeInfo.has_ws281x():
        from hardware.led.ws281x_strip import WS281xStrip
        return WS281xStrip(config)

    log.warn(
        "rpi_ws281x not available, using virtual strip",
        raspberry_pi=RuntimeInfo.is_raspberry_pi(),
        count=config.led_count,
    )
    return VirtualStrip(config.led_count, brightness=config.brightness)
