"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

OutputFormat = Literal["terminal", "json"]
LogLevel = Literal["debug", "info", "warning", "error"]

OUTPUT_FORMATS = ("terminal", "json")
LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class ParseConfig:
    grammar: str = "auto"  # auto | classic | modern | <custom grammar name>
    default_grammar: str = "modern"  # fallback when auto-detection finds nothing
    grammars_dir: str = ".gitstatus/grammars"  # relative to the repo root


@dataclass
class GitConfig:
    executable: str = "git"
    timeout: int = 30


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"
    show_summary: bool = True


@dataclass
class LoggingConfig:
    level: LogLevel = "warning"


@dataclass
class GitStatusConfig:
    version: str = "1.0"
    parse: ParseConfig = field(default_factory=ParseConfig)
    git: GitConfig = field(default_factory=GitConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
