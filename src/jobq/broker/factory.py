"""
Broker factory.
"""

from __future__ import annotations

from ..config.broker import BrokerConfig
from .base import BaseBroker
from .memory import MemoryBroker
from .redis import RedisBroker


def create_broker(config: BrokerConfig) -> BaseBroker:
    backend = config.backend

    if backend == "memory":
        return MemoryBroker()

    if backend == "redis":
        return RedisBroker.from_url(config.redis_url, socket_timeout=config.socket_timeout)

    raise ValueError(f"Unknown broker backend: {backend!r}")


__all__ = ["create_broker"]
