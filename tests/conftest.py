"""
Shared test fixtures for jobq tests.

This module provides:
- In-memory broker and queues (pickle and JSON codecs)
- Module-level task functions that both codecs can carry
  (`make_lock` returns a value neither codec can store)
- A MagicMock redis client for RedisBroker tests
"""

from __future__ import annotations

import threading
from unittest.mock import MagicMock

import pytest

from jobq import JobQueue, JsonCodec, MemoryBroker, PickleCodec, Task

# =============================================================================
# Task functions
# =============================================================================


def hello_world() -> str:
    return "Hello, World!"


def add(a: int, b: int) -> int:
    return a + b


def explode(message: str = "boom") -> None:
    raise RuntimeError(message)


def explode_silently() -> None:
    raise KeyError()


def make_lock() -> threading.Lock:
    return threading.Lock()


# =============================================================================
# Broker / Queue Fixtures
# =============================================================================


@pytest.fixture
def broker() -> MemoryBroker:
    """Fresh in-memory broker."""
    return MemoryBroker()


@pytest.fixture
def queue(broker) -> JobQueue:
    """Queue with the default pickle codec and a short poll interval."""
    return JobQueue(broker, PickleCodec(), name="test", poll_interval=0.005)


@pytest.fixture
def json_queue(broker) -> JobQueue:
    """Queue sharing the broker but using the JSON codec."""
    return JobQueue(broker, JsonCodec(), name="test-json", poll_interval=0.005)


@pytest.fixture
def failing_task() -> Task:
    return Task(explode, args=("boom",))


# =============================================================================
# Redis Mock
# =============================================================================


@pytest.fixture
def mock_redis() -> MagicMock:
    """MagicMock standing in for a redis.Redis client."""
    client = MagicMock()
    client.hget.return_value = None
    client.hgetall.return_value = {}
    client.lpop.return_value = None
    client.ping.return_value = True
    return client
