"""
Redis broker.

Job maps are Redis hashes and pending queues are Redis lists:

- get_field / put_field  -> HGET / HSET
- get_all_fields         -> HGETALL
- put_all_fields         -> HSET key mapping (one command, several fields)
- remove_map             -> DEL
- push_to_list / pop     -> RPUSH / LPOP

Requires redis: pip install redis
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, TypeVar

import redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from ..errors import BrokerConnectionError, BrokerError, ErrorContext
from .base import BaseBroker, BrokerBackendName

T = TypeVar("T")


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


class RedisBroker(BaseBroker):
    """Broker over a synchronous redis-py client.

    Example:
        ```python
        broker = RedisBroker.from_url("redis://localhost:6379/0")
        queue = JobQueue(broker)
        ```
    """

    name: BrokerBackendName = "redis"

    def __init__(self, client: Any) -> None:  # redis.Redis
        self._client = client

    @classmethod
    def from_url(cls, url: str, *, socket_timeout: float | None = None) -> RedisBroker:
        client = redis.Redis.from_url(url, decode_responses=True, socket_timeout=socket_timeout)
        return cls(client)

    @property
    def client(self) -> Any:
        return self._client

    def _call(self, operation: str, key: str, fn: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        try:
            return fn(*args, **kwargs)
        except (RedisConnectionError, RedisTimeoutError) as exc:
            raise BrokerConnectionError(
                f"Redis unavailable during {operation}: {exc}",
                context=ErrorContext(key=key, operation=operation),
                cause=exc,
            ) from exc
        except RedisError as exc:
            raise BrokerError(
                f"Redis {operation} failed: {exc}",
                context=ErrorContext(key=key, operation=operation),
                cause=exc,
            ) from exc

    def get_field(self, key: str, field: str) -> str | None:
        return _text(self._call("hget", key, self._client.hget, key, field))

    def put_field(self, key: str, field: str, value: str) -> None:
        if value is None:
            return
        self._call("hset", key, self._client.hset, key, field, str(value))

    def get_all_fields(self, key: str) -> dict[str, str]:
        raw = self._call("hgetall", key, self._client.hgetall, key) or {}
        return {_text(k): _text(v) for k, v in raw.items()}

    def put_all_fields(self, key: str, fields: Mapping[str, str | None]) -> None:
        present = self._present(fields)
        if not present:
            return
        self._call("hset", key, self._client.hset, key, mapping=present)

    def remove_map(self, key: str) -> None:
        self._call("delete", key, self._client.delete, key)

    def push_to_list(self, key: str, value: str) -> None:
        self._call("rpush", key, self._client.rpush, key, value)

    def pop_from_list(self, key: str) -> str | None:
        return _text(self._call("lpop", key, self._client.lpop, key))

    def ping(self) -> bool:
        try:
            return bool(self._client.ping())
        except RedisConnectionError:
            return False

    def close(self) -> None:
        self._client.close()


__all__ = ["RedisBroker"]
