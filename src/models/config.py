"""
Configuration models

Immutable snapshots of config.yaml. Built once by ConfigManager at startup
and handed to the components that need them; nothing mutates them at runtime.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from models.enums import LogLevel

T = TypeVar("T")


@dataclass(frozen=True)
class StripConfig:
    """WS281x strip wiring (see rpi_ws281x PixelStrip arguments)"""
    gpio_pin: int = 18
    led_count: int = 380
    brightness: int = 255       # Baseline / ceiling brightness (0-255)
    frequency_hz: int = 800_000
    dma_channel: int = 10
    invert: bool = False
    channel: int = 0            # PWM channel (0 or 1)
    color_order: str = "GRB"
    virtual: bool = False       # Force in-memory strip (development)


@dataclass(frozen=True)
class AnimationTimings:
    """Delays, ramp shape and cancellation polling for every routine"""
    display_delay_s: float = 0.5
    scan_hold_s: float = 0.02
    ramp_step: int = 25
    ramp_ceiling: int = 250
    step_hold_s: float = 120.0
    full_hold_s: float = 1200.0
    poll_interval_s: float = 1.0

    def __post_init__(self):
        if self.ramp_step < 1:
            raise ValueError(f"ramp_step must be at least 1, got {self.ramp_step}")
        if not 0 <= self.ramp_ceiling <= 255:
            raise ValueError(f"ramp_ceiling must be within 0-255, got {self.ramp_ceiling}")
        for name in ("display_delay_s", "scan_hold_s", "step_hold_s", "full_hold_s"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative, got {getattr(self, name)}")
        # Upper bound on cancel latency
        if not 0 < self.poll_interval_s <= 1.0:
            raise ValueError(f"poll_interval_s must be within (0, 1], got {self.poll_interval_s}")


@dataclass(frozen=True)
class WeatherConfig:
    enabled: bool = True
    endpoints: Tuple[str, ...] = (
        "https://api.weather.gov/gridpoints/MTR/93,86/forecast",   # Mountain View
        "https://api.weather.gov/gridpoints/MTR/86,106/forecast",  # San Francisco
    )
    user_agent: str = "SunriseLight (admin@localhost)"
    timeout_s: float = 10.0
    overlay_pixels: int = 20


@dataclass(frozen=True)
class SchedulerConfig:
    tick_interval_s: float = 5.0
    schedule_file: str = "state/schedules.json"


@dataclass(frozen=True)
class ApiConfig:
    host: str = "0.0.0.0"
    port: int = 8080
    docs_enabled: bool = True
    static_dir: Optional[str] = None   # web UI; index.html served at /


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True


@dataclass(frozen=True)
class AppConfig:
    strip: StripConfig = field(default_factory=StripConfig)
    animation: AnimationTimings = field(default_factory=AnimationTimings)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    scheduler: SchedulerConfig = field(default_factory=SchedulerConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def section_from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """
    Build a config dataclass from a YAML mapping.

    Unknown keys are ignored, missing keys keep their defaults, lists become
    tuples so the result stays hashable.
    """
    data = data or {}
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        if isinstance(value, list):
            value = tuple(value)
        kwargs[f.name] = value
    return cls(**kwargs)
