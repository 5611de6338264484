"""
Broker backends for jobq.

Available backends:
- memory: In-process dictionaries (MemoryBroker)
- redis: Redis hashes and lists (RedisBroker)
"""

from .base import BaseBroker, Broker, BrokerBackendName
from .factory import create_broker
from .memory import MemoryBroker
from .redis import RedisBroker

__all__ = [
    "Broker",
    "BaseBroker",
    "BrokerBackendName",
    "MemoryBroker",
    "RedisBroker",
    "create_broker",
]
