"""
remote_collections
==================

Python set and sorted-set handles whose state lives in a remote key-value
store (Redis). Handles are stateless proxies: every call is translated into
store commands, nothing is cached locally, and any number of processes can
work on the same key.

* :class:`remote_collections.sets.RemoteSet`
* :class:`remote_collections.sorted_sets.RemoteSortedSet`

Single-element operations (add, remove, membership, score increment, range
deletes) are atomic at the store. Set-algebra operations such as
``intersect_with`` or ``is_subset_of`` combine several commands and are not
atomic against concurrent writers.

Store switching can be done with one parameter:

    from remote_collections import CollectionClient

    client = CollectionClient.from_backend("memory")
    client = CollectionClient.from_backend("redis", redis_url="redis://127.0.0.1:6379/0")

Typical usage::

    tags = client.get_set("article:1:tags")
    tags.add("python")
    tags.union_with(["redis", "sets"])

    board = client.get_sorted_set("leaderboard")
    board.add_scored(42.0, "alice")
    board.increment_score("bob", 7.5)
    top = list(board.get_range_by_rank(0, 9, descending=True))
"""

from .backends import StoreBackend, available_backends, create_store
from .base import RemoteObject
from .client import CollectionClient
from .config import CollectionOptions, RedisStoreConfig
from .exceptions import (
    BackendConfigurationError,
    RemoteCollectionsError,
    SerializationError,
    StoreUnavailableError,
    WrongKeyTypeError,
)
from .redis_store import RedisCollectionStore
from .serializers import JsonSerializer, PickleSerializer, Serializer
from .sets import RemoteSet
from .sorted_sets import RemoteSortedSet, SortedMember
from .store import MemoryCollectionStore
from .store_protocol import CollectionStore

__all__ = [
    "BackendConfigurationError",
    "CollectionClient",
    "CollectionOptions",
    "CollectionStore",
    "JsonSerializer",
    "MemoryCollectionStore",
    "PickleSerializer",
    "RedisCollectionStore",
    "RedisStoreConfig",
    "RemoteCollectionsError",
    "RemoteObject",
    "RemoteSet",
    "RemoteSortedSet",
    "SerializationError",
    "Serializer",
    "SortedMember",
    "StoreBackend",
    "StoreUnavailableError",
    "WrongKeyTypeError",
    "available_backends",
    "create_store",
]
