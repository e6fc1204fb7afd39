"""
Runtime Configuration

Central configuration for hash selection and logging.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.hashing import DEFAULT_HASH_ALGORITHM, HashFunction, get_hash_function
from core.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "FOREST_"


@dataclass
class HashConfig:
    """Configuration for the hash primitive."""
    algorithm: str = DEFAULT_HASH_ALGORITHM

    def resolve(self) -> HashFunction:
        """Return the configured HashFunction."""
        return get_hash_function(self.algorithm)


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    file: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for the Merkle forest.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    hash: HashConfig = field(default_factory=HashConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - FOREST_HASH_ALGORITHM: Hash algorithm name (sha256, sha3_256, ...)
        - FOREST_LOG_LEVEL: Log level
        - FOREST_LOG_FILE: Log file path
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM"):
            overrides.setdefault("hash", {})["algorithm"] = os.getenv(f"{ENV_PREFIX}HASH_ALGORITHM")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides.setdefault("logging", {})["level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")
        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            overrides.setdefault("logging", {})["file"] = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigurationException(
                    f"Invalid YAML in config file: {e}", path=str(path)
                ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationException(
                "Config file must contain a mapping", path=str(path)
            )
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        hash_data = data.get("hash", {}) or {}
        logging_data = data.get("logging", {}) or {}

        try:
            hash_config = HashConfig(**hash_data) if hash_data else HashConfig()
            logging_config = LoggingConfig(**logging_data) if logging_data else LoggingConfig()
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            hash=hash_config,
            logging=logging_config,
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        data = self.to_dict()
        for section, values in overrides.items():
            if isinstance(values, dict):
                data.setdefault(section, {}).update(values)
            else:
                data[section] = values
        return self.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def get_hash_function(self) -> HashFunction:
        return self.hash.resolve()
