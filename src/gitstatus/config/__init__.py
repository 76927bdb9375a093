"""Configuration loading, schema, and defaults."""

from gitstatus.config.loader import ConfigError, load_config
from gitstatus.config.schema import GitStatusConfig

__all__ = [
    "ConfigError",
    "GitStatusConfig",
    "load_config",
]
