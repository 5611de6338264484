"""
Codec factory.
"""

from __future__ import annotations

from .base import BaseCodec
from .json_codec import JsonCodec
from .pickle_codec import PickleCodec


def create_codec(name: str = "pickle", *, compress: bool = False, compression_level: int = 6) -> BaseCodec:
    if name == "pickle":
        return PickleCodec(compress=compress, compression_level=compression_level)
    if name == "json":
        return JsonCodec(compress=compress, compression_level=compression_level)
    raise ValueError(f"Unknown codec: {name!r}")


__all__ = ["create_codec"]
