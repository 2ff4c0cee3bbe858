import pytest
import yaml

from managers.config_manager import ConfigManager
from models.config import AnimationTimings, AppConfig
from models.enums import LogLevel


def write_yaml(path, data):
    path.write_text(yaml.safe_dump(data))
    return path


@pytest.fixture
def defaults(tmp_path):
    return write_yaml(tmp_path / "factory_defaults.yaml", {"strip": {"led_count": 60}})


def test_loads_sections(tmp_path, defaults):
    config_path = write_yaml(tmp_path / "config.yaml", {
        "strip": {"led_count": 120, "gpio_pin": 21},
        "animation": {"step_hold_s": 60, "poll_interval_s": 0.5},
        "weather": {"endpoints": ["https://example.test/a"], "overlay_pixels": 10},
        "logging": {"level": "debug"},
    })

    config = ConfigManager(config_path, defaults).load()

    assert config.strip.led_count == 120
    assert config.strip.gpio_pin == 21
    assert config.animation.step_hold_s == 60
    assert config.animation.ramp_step == AnimationTimings().ramp_step
    assert config.weather.endpoints == ("https://example.test/a",)
    assert config.weather.overlay_pixels == 10
    assert config.logging.level is LogLevel.DEBUG


def test_include_files_are_merged(tmp_path, defaults):
    write_yaml(tmp_path / "hardware.yaml", {"strip": {"led_count": 42}})
    write_yaml(tmp_path / "api.yaml", {"api": {"port": 9000}})
    config_path = write_yaml(tmp_path / "config.yaml", {"include": ["hardware.yaml", "api.yaml"]})

    config = ConfigManager(config_path, defaults).load()

    assert config.strip.led_count == 42
    assert config.api.port == 9000


def test_broken_config_falls_back_to_factory_defaults(tmp_path, defaults):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("strip: [unterminated")

    config = ConfigManager(config_path, defaults).load()

    assert config.strip.led_count == 60


def test_missing_config_falls_back_to_factory_defaults(tmp_path, defaults):
    config = ConfigManager(tmp_path / "nope.yaml", defaults).load()
    assert config.strip.led_count == 60


def test_unknown_keys_are_ignored():
    config = ConfigManager.build({"strip": {"led_count": 10, "sparkle": True}, "zones": {}})
    assert config.strip.led_count == 10


def test_empty_mapping_gives_defaults():
    assert ConfigManager.build({}) == AppConfig()


@pytest.mark.parametrize("raw, expected", [("INFO", LogLevel.INFO), ("warning", LogLevel.WARN), ("Warn", LogLevel.WARN)])
def test_log_level_names(raw, expected):
    assert ConfigManager.build({"logging": {"level": raw}}).logging.level is expected


def test_unknown_log_level_is_rejected():
    with pytest.raises(ValueError):
        ConfigManager.build({"logging": {"level": "chatty"}})


def test_shipped_config_files_load():
    config = ConfigManager().load()
    assert config.strip.led_count > 0
    assert config.weather.endpoints


@pytest.mark.parametrize("animation", [
    {"ramp_step": 0},
    {"ramp_step": -25},
    {"ramp_ceiling": 300},
    {"poll_interval_s": 0},
    {"poll_interval_s": 2.5},
    {"step_hold_s": -1},
    {"display_delay_s": -0.5},
], ids=["zero-step", "negative-step", "ceiling-over-255", "zero-poll", "slow-poll", "negative-hold", "negative-delay"])
def test_bad_animation_timings_are_rejected(animation):
    with pytest.raises(ValueError):
        ConfigManager.build({"animation": animation})


def test_bad_animation_timings_in_config_file_fail_loudly(tmp_path, defaults):
    config_path = write_yaml(tmp_path / "config.yaml", {"animation": {"ramp_step": 0}})

    with pytest.raises(ValueError, match="ramp_step"):
        ConfigManager(config_path, defaults).load()


def test_edge_animation_timings_are_accepted():
    timings = ConfigManager.build({"animation": {"ramp_step": 1, "ramp_ceiling": 255, "poll_interval_s": 1.0}}).animation
    assert timings.ramp_step == 1
    assert timings.poll_interval_s == 1.0
