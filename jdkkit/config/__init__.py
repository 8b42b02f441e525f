"""Configuration module for jdkkit.

This module provides YAML configuration loading for jdkkit.yaml, with
credential overrides from the environment.
"""

from jdkkit.config.settings import (
    ConfigError,
    Settings,
    load_settings,
    load_yaml_config,
    DEFAULT_CONFIG_FILE,
)

__all__ = [
    "ConfigError",
    "Settings",
    "load_settings",
    "load_yaml_config",
    "DEFAULT_CONFIG_FILE",
]
