"""
Base classes and protocols for brokers.

A broker is a key-value store of string maps addressed by a namespaced
key. Job records are projected onto it field by field.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Literal, Protocol, runtime_checkable

BrokerBackendName = Literal["memory", "redis"]


@runtime_checkable
class Broker(Protocol):
    """
    Protocol defining the interface for broker backends.

    Only per-call atomicity is required. A batched put is not atomic across
    fields, and nothing groups two calls together.
    """

    name: BrokerBackendName

    def get_field(self, key: str, field: str) -> str | None:
        """Read one field; None if the key or field is missing."""
        ...

    def put_field(self, key: str, field: str, value: str) -> None:
        """Write one field."""
        ...

    def get_all_fields(self, key: str) -> dict[str, str]:
        """Read every field of a map; empty if the key is missing."""
        ...

    def put_all_fields(self, key: str, fields: Mapping[str, str | None]) -> None:
        """Write several fields of a map in one call."""
        ...

    def remove_map(self, key: str) -> None:
        """Delete a map and all its fields."""
        ...

    def push_to_list(self, key: str, value: str) -> None:
        """Append a value to the tail of a list."""
        ...

    def pop_from_list(self, key: str) -> str | None:
        """Pop the head of a list; None if it is empty."""
        ...

    def ping(self) -> bool:
        ...

    def close(self) -> None:
        ...


class BaseBroker(ABC):
    """
    Abstract base class for brokers.

    Provides default implementations for optional methods.
    """

    name: BrokerBackendName = "memory"

    @abstractmethod
    def get_field(self, key: str, field: str) -> str | None:
        pass

    @abstractmethod
    def put_field(self, key: str, field: str, value: str) -> None:
        pass

    @abstractmethod
    def get_all_fields(self, key: str) -> dict[str, str]:
        pass

    @abstractmethod
    def put_all_fields(self, key: str, fields: Mapping[str, str | None]) -> None:
        pass

    @abstractmethod
    def remove_map(self, key: str) -> None:
        pass

    @abstractmethod
    def push_to_list(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def pop_from_list(self, key: str) -> str | None:
        pass

    def ping(self) -> bool:
        """Default: always reachable."""
        return True

    def close(self) -> None:
        """Default no-op close."""
        return None

    def __enter__(self) -> BaseBroker:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @staticmethod
    def _present(fields: Mapping[str, str | None]) -> dict[str, str]:
        """Drop None values; a field cannot hold 'absent'."""
        return {k: str(v) for k, v in fields.items() if v is not None}


__all__ = ["Broker", "BaseBroker", "BrokerBackendName"]
