import pytest

from models.color import Color, RED, GREEN, BLUE, WHITE, BLACK


def test_named_constants():
    assert RED.to_rgb() == (255, 0, 0)
    assert GREEN.to_rgb() == (0, 255, 0)
    assert BLUE.to_rgb() == (0, 0, 255)
    assert WHITE.to_rgb() == (255, 255, 255)
    assert BLACK.to_rgb() == (0, 0, 0)
    assert Color.black() is BLACK


def test_packed_layout_is_rrggbb():
    assert Color(0x12, 0x34, 0x56).packed() == 0x123456
    assert Color.from_packed(0xFFB478) == Color(255, 180, 120)


def test_hex_parsing():
    assert Color.from_hex("#0000ff") == BLUE
    assert Color.from_hex("ff0000") == RED
    assert WHITE.to_hex() == "#ffffff"
    assert str(RED) == "#ff0000"
    with pytest.raises(ValueError):
        Color.from_hex("#fff")


@pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 1000)])
def test_channel_range_enforced(channels):
    with pytest.raises(ValueError):
        Color(*channels)


def test_channel_type_enforced():
    with pytest.raises(TypeError):
        Color(1.5, 0, 0)


def test_color_is_immutable():
    with pytest.raises(AttributeError):
        RED.r = 0
