"""
Pixel buffer operations

Pure buffer writes on top of IPhysicalStrip. None of these render; the
caller decides when a frame is complete.
"""

from typing import Iterable

from hardware.led.strip_interface import IPhysicalStrip
from models.color import Color


def pack_rgb(r: int, g: int, b: int) -> int:
    """Compose an RGB triplet into the 0xRRGGBB word the device accepts."""
    return ((r & 0xFF) << 16) | ((g & 0xFF) << 8) | (b & 0xFF)


def set_pixel_color(device: IPhysicalStrip, index: int, color: Color) -> None:
    device.set_pixel(index, pack_rgb(color.r, color.g, color.b))


def fill_strip(device: IPhysicalStrip, color: Color) -> None:
    packed = pack_rgb(color.r, color.g, color.b)
    for i in range(device.led_count):
        device.set_pixel(i, packed)


def write_frame(device: IPhysicalStrip, colors: Iterable[Color]) -> None:
    """Write one color per pixel, starting at index 0."""
    for i, color in enumerate(colors):
        set_pixel_color(device, i, color)


def fill_range(device: IPhysicalStrip, start: int, end: int, color: Color) -> None:
    """Write `color` to pixels [start, end), clamped to the strip."""
    packed = pack_rgb(color.r, color.g, color.b)
    for i in range(max(0, start), min(end, device.led_count)):
        device.set_pixel(i, packed)
