"""Configuration loading and validation."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from convmem.config.schema import ConvMemConfig
from convmem.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".convmem" / "convmem.yaml"
CONFIG_PATH_ENV = "CONVMEM_CONFIG"


class ConfigError(Exception):
    """Configuration file could not be read or holds invalid settings."""


def resolve_config_path(path: str | Path | None = None) -> Path:
    """Pick the config file: explicit path, then $CONVMEM_CONFIG, then the default."""
    if path is None:
        path = os.environ.get(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH
    return Path(path).expanduser()


def _read_yaml(path: Path) -> Any:
    try:
        return yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def load_config(path: str | Path | None = None) -> ConvMemConfig:
    """Load and validate convmem configuration from a YAML file.

    A missing or empty file means all defaults.

    Args:
        path: Config file location (see :func:`resolve_config_path`)

    Returns:
        Validated configuration object

    Raises:
        ConfigError: If the file is unreadable, not YAML, or fails validation
            (for instance a negative ``policy.max_messages``)
    """
    path = resolve_config_path(path)
    if not path.exists():
        logger.debug("No config file at %s, using defaults", path)
        return ConvMemConfig()

    config_data = _read_yaml(path)
    if config_data is None:
        return ConvMemConfig()

    try:
        return ConvMemConfig.model_validate(config_data)
    except InvalidConfiguration as e:
        raise ConfigError(f"Configuration validation failed for {path}: {e}") from e


def save_config(config: ConvMemConfig, path: str | Path | None = None) -> Path:
    """Write configuration as YAML, creating parent directories.

    Args:
        config: Configuration object to save
        path: Destination (see :func:`resolve_config_path`)

    Returns:
        Path that was written
    """
    path = resolve_config_path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(config.model_dump(), default_flow_style=False, sort_keys=False))
    return path
