"""
Runtime Configuration Module

Provides configuration loading and management for the Merkle forest.
"""

from .runtime import RuntimeConfig, HashConfig, LoggingConfig, ENV_PREFIX

__all__ = [
    "RuntimeConfig",
    "HashConfig",
    "LoggingConfig",
    "ENV_PREFIX",
]
