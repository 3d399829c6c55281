"""Settings for hookwire, with optional overrides from an ini file."""

from __future__ import annotations

import configparser
import enum
import logging
import os
from typing import Any

from hookwire.constants import CONFIG_SECTION


class Config:
    """Base configuration."""

    LOG_LEVEL = "INFO"
    LOG_TO_FILE = False
    MAX_LOG_FILES = 5


class DevelopmentConfig(Config):
    """Development configuration."""

    LOG_LEVEL = "DEBUG"
    LOG_TO_FILE = True


class ProductionConfig(Config):
    """Production configuration."""

    LOG_LEVEL = "WARNING"


class TestingConfig(Config):
    """Testing configuration."""

    LOG_LEVEL = "DEBUG"
    MAX_LOG_FILES = 1


class ConfigType(enum.Enum):
    DEVELOPMENT = DevelopmentConfig
    PRODUCTION = ProductionConfig
    TESTING = TestingConfig


def _convert_value(val: Any) -> Any:
    """Convert a string to bool/int/float if applicable, otherwise return as-is."""
    if not isinstance(val, str):
        return val

    val_lower = val.lower()
    if val_lower in ("true", "yes", "on"):
        return True
    if val_lower in ("false", "no", "off"):
        return False

    stripped = val.lstrip("-")
    if stripped.isdigit():
        return int(val)
    if stripped.replace(".", "", 1).isdigit():
        return float(val)

    return val


def settings_of(config_class: type[Config]) -> dict[str, Any]:
    """Collect the upper case settings of a Config class, inherited ones included."""
    return {name: getattr(config_class, name) for name in dir(config_class) if name.isupper()}


def load_config(
    config_type: ConfigType = ConfigType.PRODUCTION, config_file_path: str | None = None
) -> dict[str, Any]:
    """Load the settings of config_type, overridden by the [HOOKWIRE] section of an ini file.

    Option names are case insensitive in the ini file. Unknown options are
    ignored and a missing or unreadable file leaves the defaults untouched.

    Args:
        config_type: The base configuration to start from.
        config_file_path: Optional path to an ini file.

    Returns:
        dict: Setting name to value.
    """
    settings = settings_of(config_type.value)
    if config_file_path is None:
        return settings

    if not os.path.exists(config_file_path):
        logging.debug(f"Config file not found, using defaults: {config_file_path}")
        return settings

    parser = configparser.ConfigParser()
    try:
        parser.read(config_file_path, encoding="utf-8")
    except configparser.Error as e:
        logging.error(f"Failed to read config file {config_file_path}: {e}")
        return settings

    if not parser.has_section(CONFIG_SECTION):
        return settings

    for option, raw_value in parser.items(CONFIG_SECTION):
        name = option.upper()
        if name not in settings:
            logging.debug(f"Ignoring unknown setting << {option} >> in {config_file_path}")
            continue
        settings[name] = _convert_value(raw_value)

    logging.debug(f"Loaded settings from {config_file_path}")
    return settings
