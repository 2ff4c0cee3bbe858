"""
Hardware Layer

Low-level LED strip access only:

- IPhysicalStrip protocol
- WS281xStrip (rpi_ws281x, imported lazily on a Pi)
- VirtualStrip (development / tests)
"""
from .led.strip_interface import IPhysicalStrip
from .led.virtual_strip import VirtualStrip
from .led.strip_factory import create_strip

__all__ = [
    "IPhysicalStrip",
    "VirtualStrip",
    "create_strip",
]
