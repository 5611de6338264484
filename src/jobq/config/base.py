"""
Base types for configuration.
"""

from __future__ import annotations

from typing import Literal

BrokerBackendType = Literal["memory", "redis"]
CodecType = Literal["pickle", "json"]
LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["text", "json"]


__all__ = ["BrokerBackendType", "CodecType", "LogLevel", "LogFormat"]
