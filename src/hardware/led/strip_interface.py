# hardware/led/strip_interface.py
"""
IPhysicalStrip Protocol
========================
Hardware abstraction for the LED strip.
Minimal contract the animation engine relies on; the engine never sees the
wire protocol, only buffer writes, brightness and render calls.
"""

from __future__ import annotations
from typing import Protocol


class IPhysicalStrip(Protocol):
    """
    Protocol defining minimal LED strip hardware interface.

    All implementations must provide:
    - led_count: total pixels
    - set_pixel: buffer single packed 0xRRGGBB pixel (no immediate render)
    - get_pixel: read buffered pixel state
    - set_brightness / brightness: device-wide 0-255 scale
    - render: flush buffer + brightness to hardware
    - shutdown: release the device

    Buffer writes and render raise DeviceWriteError on failure.
    Not safe for concurrent writers: callers serialize through RunStateGuard.
    """

    @property
    def led_count(self) -> int:
        """Total number of addressable pixels."""
        ...

    @property
    def brightness(self) -> int:
        """Last brightness passed to set_brightness()."""
        ...

    def set_pixel(self, index: int, packed_color: int) -> None:
        """Set pixel color in buffer (does not push to hardware)."""
        ...

    def get_pixel(self, index: int) -> int:
        """Read buffered packed pixel color."""
        ...

    def set_brightness(self, level: int, channel: int = 0) -> None:
        """Set device brightness for a channel (applied on next render)."""
        ...

    def render(self) -> None:
        """Push buffered pixels to hardware (DMA transfer)."""
        ...

    def shutdown(self) -> None:
        """Blank the strip and release the device."""
        ...
