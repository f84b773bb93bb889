"""
Shared plumbing for remote collection handles.
"""

from __future__ import annotations

from typing import Any

from .config import CollectionOptions
from .serializers import JsonSerializer, Serializer
from .store_protocol import CollectionStore


class RemoteObject:
    """
    Stateless handle binding one store key to a store and a serializer.

    Handles never cache remote state: two handles with the same key and store
    always observe the same data, and every read is a fresh round-trip.

    Parameters
    ----------
    store:
        Primitive store holding the collection.
    key:
        Key naming the remote structure.
    serializer:
        Element codec. Defaults to :class:`JsonSerializer`.
    options:
        Batch sizes for lazy reads.
    """

    def __init__(
        self,
        store: CollectionStore,
        key: str,
        *,
        serializer: Serializer | None = None,
        options: CollectionOptions | None = None,
    ) -> None:
        if not key:
            raise ValueError("Remote collection key must be a non-empty string.")
        self._store = store
        self._key = str(key)
        self._serializer: Serializer = serializer or JsonSerializer()
        self._options = options or CollectionOptions()

    @property
    def key(self) -> str:
        """Return the store key of this collection."""
        return self._key

    @property
    def store(self) -> CollectionStore:
        """Return the primitive store used by this handle."""
        return self._store

    @property
    def serializer(self) -> Serializer:
        """Return the element codec used by this handle."""
        return self._serializer

    def _serialize(self, value: Any) -> bytes:
        return self._serializer.serialize(value)

    def _deserialize(self, payload: bytes) -> Any:
        return self._serializer.deserialize(payload)

    def exists(self) -> bool:
        """Return ``True`` when the remote key holds a non-empty collection."""
        return self._store.exists(self._key)

    def clear(self) -> None:
        """Delete the whole collection from the store."""
        self._store.delete(self._key)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} key={self._key!r}>"
