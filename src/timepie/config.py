"""Configuration management for timepie."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

TIMEPIE_HOME = Path(os.environ.get("TIMEPIE_HOME", Path.home() / "timepie"))
CONFIG_FILE = TIMEPIE_HOME / "config" / "timepie.conf"
DATA_DIR = TIMEPIE_HOME / "data"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class Config:
    """timepie configuration."""

    events_file: str = ""
    events_url: str = ""
    api_token: str = ""
    dial_size: int = 300
    empty_color: str = "#E5E7EB"
    show_labels: bool = True
    show_current_time: bool = True
    show_center_info: bool = True
    # Clock refresh cadence for `timepie watch`
    refresh_seconds: int = 60
    output_dir: str = ""

    def resolved_events_file(self) -> Path:
        if self.events_file:
            return Path(self.events_file).expanduser()
        return DATA_DIR / "events.json"

    def resolved_output_dir(self) -> Path:
        if self.output_dir:
            return Path(self.output_dir).expanduser()
        return DATA_DIR / "dials"


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def _parse_bool(key: str, value: str, default: bool) -> bool:
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    logger.warning(f"Invalid boolean for {key.upper()}: {value!r}, keeping {default}")
    return default


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, keeping {default}")
        return default
    if parsed <= 0:
        logger.warning(f"{key.upper()} must be positive, keeping {default}")
        return default
    return parsed


def load_config(path: Path | None = None) -> Config:
    """Load configuration from timepie.conf."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "events_file":
                config.events_file = value
            case "events_url":
                config.events_url = value
            case "api_token":
                config.api_token = value
            case "dial_size":
                config.dial_size = _parse_int(key, value, config.dial_size)
            case "empty_color":
                config.empty_color = value or config.empty_color
            case "show_labels":
                config.show_labels = _parse_bool(key, value, config.show_labels)
            case "show_current_time":
                config.show_current_time = _parse_bool(key, value, config.show_current_time)
            case "show_center_info":
                config.show_center_info = _parse_bool(key, value, config.show_center_info)
            case "refresh_seconds":
                config.refresh_seconds = _parse_int(key, value, config.refresh_seconds)
            case "output_dir":
                config.output_dir = value
            case _:
                logger.debug(f"Ignoring unknown config key {key.upper()}")

    return config
