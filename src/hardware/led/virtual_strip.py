from __future__ import annotations
from typing import List, Optional, Tuple

from hardware.led.strip_interface import IPhysicalStrip
from models.errors import DeviceWriteError


class VirtualStrip(IPhysicalStrip):
    """
    In-memory strip for development machines and tests.

    Every render() is recorded as (brightness, pixels) so tests can replay
    what the physical strip would have shown. `fail_on_render` makes the
    n-th render (1-based) raise DeviceWriteError.
    """

    def __init__(
        self,
        pixel_count: int,
        brightness: int = 255,
        fail_on_render: Optional[int] = None,
    ):
        self.pixel_count = pixel_count
        self._buffer: List[int] = [0] * pixel_count
        self._brightness = brightness
        self.fail_on_render = fail_on_render
        self.renders: List[Tuple[int, List[int]]] = []
        self.brightness_history: List[int] = []
        self.is_shut_down = False

    @property
    def led_count(self) -> int:
        return self.pixel_count

    @property
    def brightness(self) -> int:
        return self._brightness

    @property
    def render_count(self) -> int:
        return len(self.renders)

    def set_pixel(self, index: int, packed_color: int) -> None:
        if not 0 <= index < self.pixel_count:
            raise DeviceWriteError(f"Pixel index {index} out of range 0-{self.pixel_count - 1}")
        self._buffer[index] = packed_color

    def get_pixel(self, index: int) -> int:
        return self._buffer[index]

    def get_frame(self) -> List[int]:
        return list(self._buffer)

    def set_brightness(self, level: int, channel: int = 0) -> None:
        self._brightness = max(0, min(255, int(level)))
        self.brightness_history.append(self._brightness)

    def render(self) -> None:
        if self.fail_on_render is not None and len(self.renders) + 1 >= self.fail_on_render:
            self.fail_on_render = None
            raise DeviceWriteError("ws2811_render failed with code -9 (virtual)")
        self.renders.append((self._brightness, list(self._buffer)))

    def shutdown(self) -> None:
        self._buffer = [0] * self.pixel_count
        self.is_shut_down = True
