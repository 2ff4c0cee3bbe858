"""
Config Manager

Loads the YAML configuration (optionally split into included files) and
builds the immutable AppConfig the rest of the application receives.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.config import (
    AppConfig, StripConfig, AnimationTimings, WeatherConfig,
    SchedulerConfig, ApiConfig, LoggingConfig, section_from_dict,
)
from models.enums import LogLevel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Example:
        config_manager = ConfigManager()
        config = config_manager.load()
        config.strip.led_count      # 380
        config.animation.step_hold_s

    Relative paths are resolved against src/. If config.yaml is missing or
    broken, factory_defaults.yaml is used instead.
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    def _resolve(self, path: Path) -> Path:
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> AppConfig:
        """
        Process:
        1. Load main config.yaml
        2. If it has an 'include:' list, load and merge those files
        3. Fallback to factory_defaults.yaml on failure
        4. Build AppConfig
        """
        try:
            full_path = self._resolve(self.config_path)
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if "include" in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config["include"], full_path.parent)
            else:
                self.data = main_config

        except Exception as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            with open(self._resolve(self.factory_defaults_path), "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self.config = self.build(self.data)
        log.info(
            "Configuration loaded",
            leds=self.config.strip.led_count,
            gpio=self.config.strip.gpio_pin,
            api_port=self.config.api.port,
        )
        return self.config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for filename in include_list:
            with open(config_dir / filename, "r", encoding="utf-8") as f:
                file_data = yaml.safe_load(f)
            if file_data:
                merged.update(file_data)
                log.debug(f"Loaded {filename}", keys=str(list(file_data.keys())))
        return merged

    @staticmethod
    def build(data: Dict[str, Any]) -> AppConfig:
        """Turn a parsed YAML mapping into AppConfig. Raises ValueError on bad values."""
        logging_data = dict(data.get("logging") or {})
        if "level" in logging_data:
            logging_data["level"] = _parse_log_level(logging_data["level"])

        return AppConfig(
            strip=section_from_dict(StripConfig, data.get("strip")),
            animation=section_from_dict(AnimationTimings, data.get("animation")),
            weather=section_from_dict(WeatherConfig, data.get("weather")),
            scheduler=section_from_dict(SchedulerConfig, data.get("scheduler")),
            api=section_from_dict(ApiConfig, data.get("api")),
            logging=section_from_dict(LoggingConfig, logging_data),
        )

    def resolve_path(self, relative: str) -> Path:
        """Resolve a state/data path from the config against src/."""
        return self._resolve(Path(relative))


def _parse_log_level(value) -> LogLevel:
    if isinstance(value, LogLevel):
        return value
    name = str(value).upper()
    if name == "WARNING":
        name = "WARN"
    try:
        return LogLevel[name]
    except KeyError:
        raise ValueError(f"Unknown log level: {value!r}") from None
