"""Load and merge configuration from .gitstatus.toml and env vars."""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitstatus.config.schema import (
    LOG_LEVELS,
    OUTPUT_FORMATS,
    GitConfig,
    GitStatusConfig,
    LoggingConfig,
    OutputConfig,
    ParseConfig,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".gitstatus.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(repo_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = repo_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _merge_env_overrides(cfg: GitStatusConfig) -> None:
    """Apply GITSTATUS_* environment variable overrides."""
    if val := os.environ.get("GITSTATUS_GRAMMAR"):
        cfg.parse.grammar = val.strip()
    if val := os.environ.get("GITSTATUS_FORMAT"):
        if val in OUTPUT_FORMATS:
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("GITSTATUS_TIMEOUT"):
        try:
            cfg.git.timeout = int(val)
        except ValueError:
            logger.debug("Ignoring invalid GITSTATUS_TIMEOUT=%r", val)
    if val := os.environ.get("GITSTATUS_LOG_LEVEL"):
        if val.lower() in LOG_LEVELS:
            cfg.logging.level = val.lower()  # type: ignore[assignment]


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    repo_root: Path,
    config_override: Optional[str] = None,
) -> GitStatusConfig:
    """Load, validate, and return a GitStatusConfig."""
    config_path = find_config_file(repo_root, config_override)

    if config_path is None:
        cfg = GitStatusConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = GitStatusConfig(
            version=raw.get("version", "1.0"),
            parse=_build_section(raw, ParseConfig, "parse"),
            git=_build_section(raw, GitConfig, "git"),
            output=_build_section(raw, OutputConfig, "output"),
            logging=_build_section(raw, LoggingConfig, "logging"),
        )
        if cfg.output.format not in OUTPUT_FORMATS:
            raise ConfigError(f"Invalid output format in {config_path}: {cfg.output.format!r}")

    _merge_env_overrides(cfg)
    return cfg
