# hardware/led/ws281x_strip.py
"""
WS281xStrip - rpi_ws281x hardware driver
==========================================
Concrete implementation of IPhysicalStrip for WS281x chips.

This is the ONLY place in the app that touches the rpi_ws281x driver.

Features:
- Channel order handled by the C library (strip_type)
- Local buffer of packed colors as source of truth for get_pixel()
- Driver RuntimeErrors mapped onto DeviceInitError / DeviceWriteError
"""

from __future__ import annotations
from typing import List

from rpi_ws281x import PixelStrip, ws

from hardware.led.strip_interface import IPhysicalStrip
from models.config import StripConfig
from models.errors import DeviceInitError, DeviceWriteError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


STRIP_TYPES = {
    "RGB": ws.WS2811_STRIP_RGB,
    "RBG": ws.WS2811_STRIP_RBG,
    "GRB": ws.WS2811_STRIP_GRB,
    "GBR": ws.WS2811_STRIP_GBR,
    "BRG": ws.WS2811_STRIP_BRG,
    "BGR": ws.WS2811_STRIP_BGR,
}


class WS281xStrip(IPhysicalStrip):
    """
    WS281x hardware driver using rpi_ws281x library.

    One instance controls exactly ONE strip on ONE GPIO / DMA channel.
    Construction is the device Init: it raises DeviceInitError when the
    driver cannot be started.
    """

    def __init__(self, config: StripConfig) -> None:
        self.config = config

        order = config.color_order.upper()
        if order not in STRIP_TYPES:
            raise DeviceInitError(f"Unsupported color order: {config.color_order}")

        try:
            self._pixel_strip = PixelStrip(
                config.led_count,
                config.gpio_pin,
                config.frequency_hz,
                config.dma_channel,
                config.invert,
                config.brightness,
                config.channel,
                STRIP_TYPES[order],
            )
            self._pixel_strip.begin()
        except RuntimeError as ex:
            # begin() reports ws2811_init failures (no root, pin busy, bad DMA)
            raise DeviceInitError(f"ws2811_init failed on GPIO {config.gpio_pin}: {ex}") from ex

        self._buffer: List[int] = [0] * config.led_count
        self._brightness = config.brightness

        log.info(
            "WS281xStrip initialized",
            gpio=config.gpio_pin,
            count=config.led_count,
            order=order,
            dma=config.dma_channel,
            pwm=config.channel,
        )

    # ==================== IPhysicalStrip API ====================

    @property
    def led_count(self) -> int:
        return self.config.led_count

    @property
    def brightness(self) -> int:
        return self._brightness

    def set_pixel(self, index: int, packed_color: int) -> None:
        if not 0 <= index < self.config.led_count:
            raise DeviceWriteError(f"Pixel index {index} out of range 0-{self.config.led_count - 1}")
        try:
            self._pixel_strip.setPixelColor(index, packed_color)
        except Exception as ex:
            raise DeviceWriteError(f"setPixelColor({index}) failed: {ex}") from ex
        self._buffer[index] = packed_color

    def get_pixel(self, index: int) -> int:
        return self._buffer[index]

    def set_brightness(self, level: int, channel: int = 0) -> None:
        level = max(0, min(255, int(level)))
        try:
            if channel == self.config.channel:
                self._pixel_strip.setBrightness(level)
            else:
                handle = ws.ws2811_channel_get(self._pixel_strip._leds, channel)
                ws.ws2811_channel_t_brightness_set(handle, level)
        except Exception as ex:
            raise DeviceWriteError(f"setBrightness({level}) failed on channel {channel}: {ex}") from ex
        self._brightness = level

    def render(self) -> None:
        try:
            self._pixel_strip.show()
        except RuntimeError as ex:
            # ws2811_render failed with code ...
            raise DeviceWriteError(str(ex)) from ex

    def shutdown(self) -> None:
        """Blank the strip and release the DMA channel."""
        log.info(f"Shutting down WS281xStrip GPIO {self.config.gpio_pin}")
        try:
            for i in range(self.config.led_count):
                self._pixel_strip.setPixelColor(i, 0)
            self._pixel_strip.show()
        except RuntimeError as ex:
            log.error("Failed to blank strip during shutdown", error=str(ex))
        finally:
            self._pixel_strip._cleanup()
