"""
JSON encoding built on orjson, used by the JSON payload codec.

orjson already handles dicts, lists, tuples, dataclasses and datetimes;
`_fallback` covers the remaining types a task argument or result is
likely to carry.
"""

from __future__ import annotations

from typing import Any

import orjson


def _fallback(obj: Any) -> Any:
    if isinstance(obj, (set, frozenset)):
        return sorted(obj, key=repr)
    if isinstance(obj, bytes):
        return obj.decode("utf-8")
    if isinstance(obj, type):
        return f"{obj.__module__}.{obj.__qualname__}"
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Type is not JSON serializable: {type(obj).__name__}")


def dumps(obj: Any, *, sort_keys: bool = False) -> bytes:
    """Encode to JSON bytes; `sort_keys` gives byte-stable output for equal values."""
    option = orjson.OPT_SORT_KEYS if sort_keys else 0
    return orjson.dumps(obj, default=_fallback, option=option)


def dumps_text(obj: Any, *, sort_keys: bool = False) -> str:
    return dumps(obj, sort_keys=sort_keys).decode("utf-8")


def loads(data: bytes | str) -> Any:
    return orjson.loads(data)


__all__ = ["dumps", "dumps_text", "loads"]
