"""
Configuration for brokers, queues, workers and logging.

Each section is a validated dataclass; `Settings` groups them and loads
them from `JOBQ_*` environment variables, a `.env` file, or a YAML/TOML
file checked against `jobq.config_schema.CONFIG_SCHEMA`.
"""

from .base import BrokerBackendType, CodecType, LogFormat, LogLevel
from .broker import BrokerConfig
from .logging import LoggingConfig
from .queue import QueueConfig, WorkerConfig
from .settings import Settings, configure, get_settings, load_env

__all__ = [
    # Types
    "BrokerBackendType",
    "CodecType",
    "LogLevel",
    "LogFormat",
    # Section configs
    "BrokerConfig",
    "QueueConfig",
    "WorkerConfig",
    "LoggingConfig",
    # Master config
    "Settings",
    # Global functions
    "get_settings",
    "configure",
    "load_env",
]
