"""
Animation system for the LED strip

- engine: AnimationEngine, single-writer runner behind the RunStateGuard
- base: BaseAnimation and AnimationContext
- color_fill, pixel_scan, brightness_ramp, sunrise, diagnostic: routines
- rain_overlay: weather refinement of the sunrise frame
"""

# from .engine import AnimationEngine
# from .base import BaseAnimation

__all__ = [
    "engine",
    "base",
    "sunrise",
]
