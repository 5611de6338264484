from __future__ import annotations

from dataclasses import dataclass
from typing import get_args

from .base import LogFormat, LogLevel


@dataclass
class LoggingConfig:
    """Level and output format applied by `configure_logging`."""

    level: LogLevel = "INFO"
    format: LogFormat = "json"

    def __post_init__(self):
        if self.level not in get_args(LogLevel):
            raise ValueError(f"Unknown log level {self.level!r}; expected one of {get_args(LogLevel)}")
        if self.format not in get_args(LogFormat):
            raise ValueError(f"Unknown log format {self.format!r}; expected one of {get_args(LogFormat)}")

    @property
    def json_output(self) -> bool:
        return self.format == "json"


__all__ = ["LoggingConfig"]
