"""
CLI Configuration

Configuration file discovery for the forest CLI.
Supports JSON and YAML files plus environment variables.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from core.config import RuntimeConfig
from core.schemas.errors import ConfigurationException


logger = logging.getLogger(__name__)


def default_config_paths() -> list[Path]:
    """Config locations checked when no path is given, in order."""
    return [
        Path.cwd() / "forest.json",
        Path.cwd() / ".forest.json",
        Path.home() / ".config" / "merkle-forest" / "config.json",
    ]


def load_config_from_file(path: Path) -> RuntimeConfig:
    """Load configuration from a JSON or YAML file (by extension)."""
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix in (".yaml", ".yml"):
        return RuntimeConfig.from_yaml(path)

    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationException(
                f"Invalid JSON in config file: {e}", path=str(path)
            ) from e

    if not isinstance(data, dict):
        raise ConfigurationException("Config file must contain an object", path=str(path))
    return RuntimeConfig.from_dict(data)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Without an explicit
    path the first existing default location is used.

    Args:
        config_path: Optional path to config file

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        for default_path in default_config_paths():
            if default_path.exists():
                logger.debug(f"Using config file {default_path}")
                config = load_config_from_file(default_path)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return """{
  "hash": {
    "algorithm": "sha256"
  },
  "logging": {
    "level": "INFO",
    "file": null
  }
}
"""
