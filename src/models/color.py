"""
Color model - immutable 8-bit RGB triplet

The LED device accepts colors packed into a single 24-bit integer
(0xRRGGBB). Color is the value type used everywhere above the device;
packing happens only at the pixel-buffer boundary.
"""

from dataclasses import dataclass
from typing import Tuple


def _check_channel(name: str, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if not 0 <= value <= 255:
        raise ValueError(f"{name} out of range 0-255: {value}")


@dataclass(frozen=True)
class Color:
    """
    RGB color, one byte per channel.

    Examples:
        warm = Color(255, 180, 120)
        packed = warm.packed()              # 0xFFB478
        Color.from_packed(packed) == warm   # True
        Color.from_hex("#0000ff") == BLUE   # True
    """

    r: int
    g: int
    b: int

    def __post_init__(self):
        _check_channel("r", self.r)
        _check_channel("g", self.g)
        _check_channel("b", self.b)

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r: int, g: int, b: int) -> 'Color':
        return cls(r, g, b)

    @classmethod
    def from_packed(cls, value: int) -> 'Color':
        """Unpack a 0xRRGGBB integer."""
        return cls((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def from_hex(cls, hexstr: str) -> 'Color':
        """Parse '#RRGGBB' or 'RRGGBB'."""
        s = hexstr.lstrip('#')
        if len(s) != 6:
            raise ValueError(f"Invalid hex color: {hexstr!r}")
        return cls(int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))

    @classmethod
    def black(cls) -> 'Color':
        return BLACK

    # === CONVERSIONS ===

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def packed(self) -> int:
        """Packed 24-bit representation accepted by the device."""
        return (self.r << 16) | (self.g << 8) | self.b

    def to_hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __str__(self) -> str:
        return self.to_hex()


RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
