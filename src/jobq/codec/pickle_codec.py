from __future__ import annotations

import pickle
from typing import Any

from .base import BaseCodec, CodecName


class PickleCodec(BaseCodec):
    """
    Codec for arbitrary picklable Python objects.

    Only decode payloads from a broker you trust: unpickling runs code.
    """

    name: CodecName = "pickle"

    def __init__(
        self,
        compress: bool = False,
        compression_level: int = 6,
        protocol: int = pickle.HIGHEST_PROTOCOL,
    ) -> None:
        super().__init__(compress=compress, compression_level=compression_level)
        self.protocol = protocol

    def _dumps(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def _loads(self, data: bytes) -> Any:
        return pickle.loads(data)


__all__ = ["PickleCodec"]
