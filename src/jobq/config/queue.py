"""
Queue and worker configuration.
"""

from __future__ import annotations

from dataclasses import dataclass

from .base import CodecType


@dataclass
class QueueConfig:
    """Configuration for a job queue and the default options of its jobs."""

    name: str = "default"

    # Payload codec
    codec: CodecType = "pickle"
    compress: bool = False
    compression_level: int = 6

    # Interval between result checks while waiting (seconds)
    poll_interval: float = 0.001

    # Job option defaults (seconds)
    job_timeout: int = 180
    ttl: int = -1
    result_ttl: int = 500
    failure_ttl: int = 31_536_000

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.name:
            raise ValueError("name cannot be empty")
        if self.codec not in ("pickle", "json"):
            raise ValueError(f"Invalid codec: {self.codec}")
        if not (0 <= self.compression_level <= 9):
            raise ValueError("compression_level must be between 0 and 9")
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if self.job_timeout <= 0:
            raise ValueError("job_timeout must be positive")


@dataclass
class WorkerConfig:
    """Configuration for workers."""

    poll_interval: float = 1.0
    burst: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.poll_interval <= 0:
            raise ValueError("poll_interval must be positive")


__all__ = ["QueueConfig", "WorkerConfig"]
