"""
`Settings`: the four config sections, loadable from env vars or a file.

Environment variables (default prefix ``JOBQ_``)::

    BROKER_BACKEND  REDIS_URL  REDIS_SOCKET_TIMEOUT
    QUEUE_NAME  CODEC  COMPRESS  POLL_INTERVAL
    JOB_TIMEOUT  TTL  RESULT_TTL  FAILURE_TTL
    WORKER_POLL_INTERVAL  WORKER_BURST
    LOG_LEVEL  LOG_FORMAT
"""

from __future__ import annotations

import dataclasses
import os
import tomllib
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from dotenv import find_dotenv, load_dotenv

from ..config_schema import CONFIG_SCHEMA
from ..errors import InvalidConfigError
from .broker import BrokerConfig
from .logging import LoggingConfig
from .queue import QueueConfig, WorkerConfig


def _flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _lower(value: str) -> str:
    return value.lower()


def _upper(value: str) -> str:
    return value.upper()


# env suffix -> (section, field, parser)
_ENV_FIELDS: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "BROKER_BACKEND": ("broker", "backend", _lower),
    "REDIS_URL": ("broker", "redis_url", str),
    "REDIS_SOCKET_TIMEOUT": ("broker", "socket_timeout", float),
    "QUEUE_NAME": ("queue", "name", str),
    "CODEC": ("queue", "codec", _lower),
    "COMPRESS": ("queue", "compress", _flag),
    "POLL_INTERVAL": ("queue", "poll_interval", float),
    "JOB_TIMEOUT": ("queue", "job_timeout", int),
    "TTL": ("queue", "ttl", int),
    "RESULT_TTL": ("queue", "result_ttl", int),
    "FAILURE_TTL": ("queue", "failure_ttl", int),
    "WORKER_POLL_INTERVAL": ("worker", "poll_interval", float),
    "WORKER_BURST": ("worker", "burst", _flag),
    "LOG_LEVEL": ("logging", "level", _upper),
    "LOG_FORMAT": ("logging", "format", _lower),
}


def _read_yaml(path: Path) -> Any:
    with path.open() as f:
        return yaml.safe_load(f)


def _read_toml(path: Path) -> Any:
    with path.open("rb") as f:
        return tomllib.load(f)


_FILE_READERS: dict[str, Callable[[Path], Any]] = {
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
    ".toml": _read_toml,
}


@dataclass
class Settings:
    """Broker, queue, worker and logging configuration."""

    broker: BrokerConfig = field(default_factory=BrokerConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    worker: WorkerConfig = field(default_factory=WorkerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def default(cls) -> Settings:
        return cls()

    @classmethod
    def from_env(cls, prefix: str = "JOBQ_") -> Settings:
        """Build settings from ``<prefix><NAME>`` variables; unset ones keep defaults."""
        sections: dict[str, dict[str, Any]] = {"broker": {}, "queue": {}, "worker": {}, "logging": {}}
        for suffix, (section, name, parse) in _ENV_FIELDS.items():
            raw = os.getenv(prefix + suffix)
            if raw:
                sections[section][name] = parse(raw)
        return cls._build(sections)

    @classmethod
    def from_file(cls, path: str | Path) -> Settings:
        """
        Load a YAML (``.yaml``/``.yml``) or TOML (``.toml``) file.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: For other file extensions
            InvalidConfigError: If the content does not match the config schema
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found: {path}")
        reader = _FILE_READERS.get(path.suffix.lower())
        if reader is None:
            raise ValueError(f"Unsupported config file type {path.suffix!r}; use .yaml, .yml or .toml")
        return cls.from_dict(reader(path) or {})

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Validate `data` against the config schema, then build the sections."""
        try:
            jsonschema.validate(instance=data, schema=CONFIG_SCHEMA)
        except jsonschema.ValidationError as exc:
            location = "/".join(str(p) for p in exc.absolute_path) or "<root>"
            raise InvalidConfigError(f"Configuration validation failed at {location}: {exc.message}", cause=exc) from exc
        return cls._build(data)

    @classmethod
    def _build(cls, sections: dict[str, dict[str, Any]]) -> Settings:
        return cls(
            broker=BrokerConfig(**sections.get("broker", {})),
            queue=QueueConfig(**sections.get("queue", {})),
            worker=WorkerConfig(**sections.get("worker", {})),
            logging=LoggingConfig(**sections.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


_global_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read from the environment on first use."""
    global _global_settings
    if _global_settings is None:
        _global_settings = Settings.from_env()
    return _global_settings


def configure(settings: Settings | None = None, **sections: Any) -> Settings:
    """
    Replace the process-wide settings, or individual sections of them.

    Example:
        ```python
        configure(queue=QueueConfig(name="reports", codec="json"))
        ```
    """
    global _global_settings
    current = settings or _global_settings or Settings.from_env()
    unknown = set(sections) - {f.name for f in dataclasses.fields(Settings)}
    if unknown:
        raise ValueError(f"Unknown settings sections: {sorted(unknown)}")
    _global_settings = dataclasses.replace(current, **sections) if sections else current
    return _global_settings


def load_env(path: str | None = None, *, override: bool = False) -> bool:
    """
    Load a ``.env`` file into ``os.environ``.

    Without `path` the nearest ``.env`` from the working directory upward
    is used. Returns False when no file was found.
    """
    env_path = path or find_dotenv(usecwd=True)
    if not env_path:
        return False
    return load_dotenv(env_path, override=override)


__all__ = ["Settings", "get_settings", "configure", "load_env"]
