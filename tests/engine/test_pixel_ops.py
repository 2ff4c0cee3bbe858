import pytest

from engine.pixel_ops import pack_rgb, set_pixel_color, fill_strip, fill_range, write_frame
from hardware.led.virtual_strip import VirtualStrip
from models.color import Color, RED, BLUE, BLACK
from models.errors import DeviceWriteError


def test_pack_rgb():
    assert pack_rgb(255, 0, 0) == 0xFF0000
    assert pack_rgb(0, 255, 0) == 0x00FF00
    assert pack_rgb(0, 0, 255) == 0x0000FF
    assert pack_rgb(1, 2, 3) == 0x010203


def test_fill_strip_writes_every_pixel_without_render():
    strip = VirtualStrip(8)
    fill_strip(strip, RED)
    assert strip.get_frame() == [RED.packed()] * 8
    assert strip.render_count == 0


def test_set_pixel_color():
    strip = VirtualStrip(4)
    set_pixel_color(strip, 2, Color(1, 2, 3))
    assert strip.get_frame() == [0, 0, 0x010203, 0]


def test_fill_range_is_clamped():
    strip = VirtualStrip(6)
    fill_range(strip, 4, 100, BLUE)
    fill_range(strip, -3, 1, RED)
    assert [Color.from_packed(p) for p in strip.get_frame()] == [RED, BLACK, BLACK, BLACK, BLUE, BLUE]


def test_write_frame():
    strip = VirtualStrip(3)
    write_frame(strip, [RED, BLUE, RED])
    assert strip.get_frame() == [RED.packed(), BLUE.packed(), RED.packed()]


def test_out_of_range_pixel_is_a_device_error():
    strip = VirtualStrip(3)
    with pytest.raises(DeviceWriteError):
        set_pixel_color(strip, 3, RED)
