"""
Element serializers.

The store only ever sees serialized payloads: membership, uniqueness and
tie-break ordering are decided on bytes, not on the Python values. A
serializer must therefore be deterministic, so that two equal values always
produce identical payloads.
"""

from __future__ import annotations

import json
import pickle
from typing import Any, Protocol

from .exceptions import SerializationError


class Serializer(Protocol):
    """Behavioral contract for element codecs."""

    def serialize(self, value: Any) -> bytes:
        """Return the payload stored for ``value``."""

    def deserialize(self, payload: bytes) -> Any:
        """Return the value encoded in ``payload``."""


class JsonSerializer:
    """
    Compact, key-sorted JSON codec.

    Sorting object keys makes equal dicts serialize identically. JSON has no
    tuple or set type, and ``1`` and ``1.0`` are different payloads even though
    they compare equal in Python.
    """

    def __init__(self, *, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def serialize(self, value: Any) -> bytes:
        try:
            text = json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"Cannot serialize value of type {type(value).__name__!r} as JSON."
            ) from exc
        return text.encode(self._encoding)

    def deserialize(self, payload: bytes) -> Any:
        try:
            if isinstance(payload, (bytes, bytearray, memoryview)):
                return json.loads(bytes(payload).decode(self._encoding))
            return json.loads(payload)
        except (TypeError, ValueError) as exc:
            # UnicodeDecodeError and JSONDecodeError are both ValueError.
            raise SerializationError(f"Cannot decode JSON payload {payload!r}.") from exc


class PickleSerializer:
    """
    Binary codec based on :mod:`pickle`.

    Supports arbitrary Python objects, but two equal containers whose internal
    iteration order differs (for example sets built in a different order) may
    pickle differently. Prefer :class:`JsonSerializer` for set members.
    """

    def __init__(self, *, protocol: int = pickle.HIGHEST_PROTOCOL) -> None:
        self._protocol = protocol

    def serialize(self, value: Any) -> bytes:
        try:
            return pickle.dumps(value, protocol=self._protocol)
        except (pickle.PicklingError, TypeError, AttributeError) as exc:
            raise SerializationError(
                f"Cannot pickle value of type {type(value).__name__!r}."
            ) from exc

    def deserialize(self, payload: bytes) -> Any:
        try:
            return pickle.loads(payload)
        except (pickle.UnpicklingError, EOFError, TypeError, ValueError, AttributeError, ImportError) as exc:
            raise SerializationError(f"Cannot unpickle payload {payload!r}.") from exc
