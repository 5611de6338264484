"""
Broker configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from .base import BrokerBackendType


@dataclass
class BrokerConfig:
    """Configuration for the broker backend."""

    backend: BrokerBackendType = "memory"

    # Redis settings
    redis_url: str = field(default_factory=lambda: os.getenv("REDIS_URL", "redis://localhost:6379/0"))
    socket_timeout: float | None = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.backend not in ("memory", "redis"):
            raise ValueError(f"Invalid broker backend: {self.backend}")
        if self.backend == "redis":
            if not self.redis_url:
                raise ValueError("redis_url is required for redis backend")
            if not self.redis_url.startswith(("redis://", "rediss://", "unix://")):
                raise ValueError("redis_url must be a valid Redis connection string")
        if self.socket_timeout is not None and self.socket_timeout <= 0:
            raise ValueError("socket_timeout must be positive")


__all__ = ["BrokerConfig"]
