"""
Configuration loader for the step calculator.
Handles loading the default config file and merging an optional override on top.
"""

import logging
from typing import Any, Optional

import yaml

from ..models import StepcalcConfig

DEFAULT_CONFIG_PATH = "config/stepcalc_config.yaml"


def merge_configs(default: dict, override: dict) -> dict:
    """Recursively merge two dictionaries."""
    for key, value in override.items():
        if isinstance(value, dict) and key in default and isinstance(default[key], dict):
            default[key] = merge_configs(default[key], value)
        else:
            default[key] = value
    return default


logger = logging.getLogger(__name__)

# Active configuration instance set at application startup
_active_config: Optional[StepcalcConfig] = None


def set_active_config(config: StepcalcConfig) -> None:
    """Set the process-wide active configuration instance."""
    global _active_config
    _active_config = config


def get_active_config() -> StepcalcConfig:
    """Get the active configuration, loading defaults if not yet set."""
    global _active_config
    if _active_config is None:
        _active_config = load_config()
    return _active_config


def _read_yaml(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")
    return data


def load_config(
    config_path: str | None = None, default_config_path: str = DEFAULT_CONFIG_PATH
) -> StepcalcConfig:
    """
    Load the calculator configuration.

    Args:
        config_path: Optional path to a config file whose values override the defaults.
        default_config_path: Path of the default config file, relative to the working directory.

    Returns:
        A validated StepcalcConfig. Raises pydantic.ValidationError on bad values.
    """
    try:
        config_data = _read_yaml(default_config_path)
    except FileNotFoundError:
        logger.debug(f"Default configuration file not found: {default_config_path}")
        config_data = {}

    if config_path:
        try:
            config_data = merge_configs(config_data, _read_yaml(config_path))
        except FileNotFoundError:
            logger.error(f"Override configuration file not found: {config_path}")

    logger.debug("Loaded stepcalc configuration.")
    return StepcalcConfig(**config_data)
