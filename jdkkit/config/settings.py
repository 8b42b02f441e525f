"""
Configuration for jdkkit.

Settings come from an optional YAML file (``jdkkit.yaml`` by default),
with credentials overridable from the environment:

    cache_dir: ~/.jdkkit
    catalog: ~/.jdkkit/catalog.json
    accept_license: true
    username: me@example.com
    password: secret
    sso_host: login.oracle.com
    http_timeout: 60
    process_timeout: 3600
    lock_downloads: true
    lock_timeout: 600
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from jdkkit.core.directory import get_default_catalog_path, get_global_cache_dir
from jdkkit.jdk.auth import DEFAULT_TIMEOUT, SSO_HOST, Credentials

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "jdkkit.yaml"

ENV_USERNAME = "JDKKIT_USERNAME"
ENV_PASSWORD = "JDKKIT_PASSWORD"


class ConfigError(ValueError):
    """Raised when the configuration file is invalid."""

    pass


@dataclass
class Settings:
    """Resolved jdkkit configuration."""

    cache_dir: Path
    catalog: Path
    accept_license: bool = False
    username: Optional[str] = None
    password: Optional[str] = None
    sso_host: str = SSO_HOST
    http_timeout: float = DEFAULT_TIMEOUT
    process_timeout: Optional[float] = 3600
    lock_downloads: bool = True
    lock_timeout: float = 600
    source: Optional[Path] = None

    def credentials(self) -> Optional[Credentials]:
        """Configured account, or None unless both halves are set."""
        if not self.username or not self.password:
            return None
        return Credentials(self.username, self.password)

    def credential_hint(self) -> str:
        """Tell the user where credentials are read from."""
        location = str(self.source) if self.source else DEFAULT_CONFIG_FILE
        return f"{location} (username/password) or ${ENV_USERNAME}/${ENV_PASSWORD}"


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        FileNotFoundError: If required=True and file doesn't exist
        ConfigError: If YAML parsing fails
    """
    if not config_file.exists():
        if required:
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigError(f"Expected a mapping at the top of {config_file}")
    return config


def _as_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    raise ConfigError(f"'{key}' must be true or false, got {value!r}")


def _as_number(key: str, value: Any) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0:
        return value
    raise ConfigError(f"'{key}' must be a positive number, got {value!r}")


def load_settings(
    config_file: Optional[Path] = None,
    environ: Optional[Dict[str, str]] = None,
) -> Settings:
    """
    Build settings from a config file and the environment.

    Args:
        config_file: Explicit config file (required to exist). If None,
            ``./jdkkit.yaml`` is used when present.
        environ: Environment to read overrides from (default: os.environ)

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ConfigError: If the file is invalid
    """
    environ = os.environ if environ is None else environ

    if config_file is not None:
        source: Optional[Path] = Path(config_file)
        config = load_yaml_config(source, required=True)
    else:
        source = Path.cwd() / DEFAULT_CONFIG_FILE
        config = load_yaml_config(source)
        if not source.exists():
            source = None

    known = {f.name for f in fields(Settings)} - {"source"}
    unknown = set(config) - known
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")

    cache_dir = (
        Path(str(config["cache_dir"])).expanduser()
        if config.get("cache_dir")
        else get_global_cache_dir()
    )
    catalog = (
        Path(str(config["catalog"])).expanduser()
        if config.get("catalog")
        else get_default_catalog_path(cache_dir)
    )

    settings = Settings(cache_dir=cache_dir, catalog=catalog, source=source)

    if "accept_license" in config:
        settings.accept_license = _as_bool("accept_license", config["accept_license"])
    if "lock_downloads" in config:
        settings.lock_downloads = _as_bool("lock_downloads", config["lock_downloads"])
    if "http_timeout" in config:
        settings.http_timeout = _as_number("http_timeout", config["http_timeout"])
    if "lock_timeout" in config:
        settings.lock_timeout = _as_number("lock_timeout", config["lock_timeout"])
    if "process_timeout" in config:
        value = config["process_timeout"]
        settings.process_timeout = (
            None if value is None else _as_number("process_timeout", value)
        )
    if config.get("sso_host"):
        settings.sso_host = str(config["sso_host"])

    settings.username = environ.get(ENV_USERNAME) or config.get("username")
    settings.password = environ.get(ENV_PASSWORD) or config.get("password")
    if settings.username is not None:
        settings.username = str(settings.username)
    if settings.password is not None:
        settings.password = str(settings.password)

    return settings


__all__ = [
    "ConfigError",
    "Settings",
    "load_yaml_config",
    "load_settings",
    "DEFAULT_CONFIG_FILE",
]
