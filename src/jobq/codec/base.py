"""
Base classes and protocols for payload codecs.

A codec turns a task descriptor or a result into text that fits in a single
broker field, and back. The text form is base64 over the codec's bytes,
optionally zlib-compressed.
"""

from __future__ import annotations

import base64
import binascii
import zlib
from abc import ABC, abstractmethod
from typing import Any, Literal, Protocol, runtime_checkable

from ..errors import CodecError

CodecName = Literal["pickle", "json"]


@runtime_checkable
class PayloadCodec(Protocol):
    """Protocol for byte<->object codecs used for tasks and results."""

    name: CodecName

    def encode_to_text(self, value: Any) -> str:
        ...

    def decode_from_text(self, text: str) -> Any:
        ...


class BaseCodec(ABC):
    """Base64 text framing around a bytes serializer."""

    name: CodecName = "pickle"

    def __init__(self, compress: bool = False, compression_level: int = 6) -> None:
        if not (0 <= compression_level <= 9):
            raise ValueError("compression_level must be between 0 and 9")
        self.compress = compress
        self.compression_level = compression_level

    @abstractmethod
    def _dumps(self, value: Any) -> bytes:
        pass

    @abstractmethod
    def _loads(self, data: bytes) -> Any:
        pass

    def encode_to_text(self, value: Any) -> str:
        try:
            raw = self._dumps(value)
        except CodecError:
            raise
        except Exception as exc:
            raise CodecError(f"Cannot encode {type(value).__name__} with {self.name} codec: {exc}", cause=exc) from exc
        if self.compress:
            raw = zlib.compress(raw, level=self.compression_level)
        return base64.b64encode(raw).decode("ascii")

    def decode_from_text(self, text: str) -> Any:
        if text is None:
            raise CodecError("Cannot decode an absent payload")
        try:
            raw = base64.b64decode(text.encode("ascii"), validate=True)
            if self.compress:
                raw = zlib.decompress(raw)
        except (binascii.Error, zlib.error, UnicodeEncodeError) as exc:
            raise CodecError(f"Malformed {self.name} payload: {exc}", cause=exc) from exc
        try:
            return self._loads(raw)
        except CodecError:
            raise
        except Exception as exc:
            raise CodecError(f"Cannot decode {self.name} payload: {exc}", cause=exc) from exc

    def __repr__(self) -> str:
        return f"{type(self).__name__}(compress={self.compress})"


__all__ = ["PayloadCodec", "BaseCodec", "CodecName"]
