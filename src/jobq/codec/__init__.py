"""
Payload codecs for task descriptors and results.

Available codecs:
- pickle: Any picklable object (PickleCodec, default)
- json: JSON-native values and importable tasks (JsonCodec)
"""

from .base import BaseCodec, CodecName, PayloadCodec
from .factory import create_codec
from .json_codec import JsonCodec
from .pickle_codec import PickleCodec

__all__ = [
    "PayloadCodec",
    "BaseCodec",
    "CodecName",
    "PickleCodec",
    "JsonCodec",
    "create_codec",
]
