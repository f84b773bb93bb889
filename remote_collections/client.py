"""
Entry point binding one primitive store and serializer to collection handles.
"""

from __future__ import annotations

import threading
from typing import Any

from .backends import StoreBackend, create_store
from .config import CollectionOptions
from .serializers import JsonSerializer, Serializer
from .sets import RemoteSet
from .sorted_sets import RemoteSortedSet
from .store_protocol import CollectionStore


class CollectionClient:
    """
    Factory for remote collection handles sharing one store.

    Handles are stateless, so the client hands out one cached handle per key
    and collection type.

    Parameters
    ----------
    store:
        Primitive store backend.
    serializer:
        Element codec used by every handle. Defaults to :class:`JsonSerializer`.
    options:
        Batch sizes for lazy reads.
    """

    @classmethod
    def from_backend(
        cls,
        backend: str | StoreBackend = StoreBackend.MEMORY,
        *,
        serializer: Serializer | None = None,
        options: CollectionOptions | None = None,
        **backend_options: Any,
    ) -> "CollectionClient":
        """
        Build a client with a named store backend in one call.

        Examples
        --------
        In-memory backend (default)::

            client = CollectionClient.from_backend("memory")

        Redis backend::

            client = CollectionClient.from_backend(
                "redis",
                redis_url="redis://127.0.0.1:6379/0",
                namespace="orders",
            )
        """
        store = create_store(backend=backend, **backend_options)
        return cls(store, serializer=serializer, options=options)

    def __init__(
        self,
        store: CollectionStore,
        *,
        serializer: Serializer | None = None,
        options: CollectionOptions | None = None,
    ) -> None:
        self.store = store
        self.serializer: Serializer = serializer or JsonSerializer()
        self.options = options or CollectionOptions()
        self._handle_lock = threading.RLock()
        self._set_handles: dict[str, RemoteSet] = {}
        self._sorted_set_handles: dict[str, RemoteSortedSet] = {}

    def get_set(self, key: str) -> RemoteSet:
        """Return remote set handle for ``key``."""
        with self._handle_lock:
            handle = self._set_handles.get(key)
            if handle is None:
                handle = RemoteSet(self.store, key, serializer=self.serializer, options=self.options)
                self._set_handles[key] = handle
            return handle

    def get_sorted_set(self, key: str) -> RemoteSortedSet:
        """Return remote sorted set handle for ``key``."""
        with self._handle_lock:
            handle = self._sorted_set_handles.get(key)
            if handle is None:
                handle = RemoteSortedSet(self.store, key, serializer=self.serializer, options=self.options)
                self._sorted_set_handles[key] = handle
            return handle
