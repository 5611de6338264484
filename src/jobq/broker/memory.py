from __future__ import annotations

import threading
from collections import deque
from collections.abc import Mapping
from typing import Deque

from .base import BaseBroker, BrokerBackendName


class MemoryBroker(BaseBroker):
    """
    In-process broker backed by dictionaries.

    Suitable for testing and single-process deployments.
    Thread-safe via threading.Lock; each call is atomic on its own.
    """

    name: BrokerBackendName = "memory"

    def __init__(self) -> None:
        self._maps: dict[str, dict[str, str]] = {}
        self._lists: dict[str, Deque[str]] = {}
        self._lock = threading.Lock()

    def get_field(self, key: str, field: str) -> str | None:
        with self._lock:
            fields = self._maps.get(key)
            return fields.get(field) if fields else None

    def put_field(self, key: str, field: str, value: str) -> None:
        if value is None:
            return
        with self._lock:
            self._maps.setdefault(key, {})[field] = str(value)

    def get_all_fields(self, key: str) -> dict[str, str]:
        with self._lock:
            return dict(self._maps.get(key, {}))

    def put_all_fields(self, key: str, fields: Mapping[str, str | None]) -> None:
        present = self._present(fields)
        if not present:
            return
        with self._lock:
            self._maps.setdefault(key, {}).update(present)

    def remove_map(self, key: str) -> None:
        with self._lock:
            self._maps.pop(key, None)

    def push_to_list(self, key: str, value: str) -> None:
        with self._lock:
            self._lists.setdefault(key, deque()).append(value)

    def pop_from_list(self, key: str) -> str | None:
        with self._lock:
            items = self._lists.get(key)
            if not items:
                return None
            value = items.popleft()
            if not items:
                del self._lists[key]
            return value

    def keys(self) -> list[str]:
        """Keys of all stored maps."""
        with self._lock:
            return list(self._maps)

    def flush(self) -> None:
        """Drop everything."""
        with self._lock:
            self._maps.clear()
            self._lists.clear()


__all__ = ["MemoryBroker"]
