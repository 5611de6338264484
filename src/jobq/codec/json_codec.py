from __future__ import annotations

from typing import Any

from .. import serialization
from ..task import Task
from .base import BaseCodec, CodecName

TASK_TAG = "__task__"


class JsonCodec(BaseCodec):
    """
    Codec for JSON-native values.

    A `Task` whose function is importable by path is stored as
    ``{"__task__": {...}}`` and rebuilt on decode. Tuples come back as
    lists; sets come back as sorted lists.
    """

    name: CodecName = "json"

    def _dumps(self, value: Any) -> bytes:
        if isinstance(value, Task):
            value = {TASK_TAG: value.to_dict()}
        return serialization.dumps(value, sort_keys=True)

    def _loads(self, data: bytes) -> Any:
        value = serialization.loads(data)
        if isinstance(value, dict) and len(value) == 1 and TASK_TAG in value:
            return Task.from_dict(value[TASK_TAG])
        return value


__all__ = ["JsonCodec"]
