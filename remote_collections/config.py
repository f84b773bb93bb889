"""
Configuration models for remote collections.

This module centralizes the tunable settings used by stores and collection
handles:

* Redis connection URL, key namespace and per-call timeout
* batch size for scans and paged range reads

Connection pooling, retry and reconnect policy stay with the ``redis`` client
itself; these settings are only forwarded to it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class RedisStoreConfig:
    """
    Configuration for :class:`remote_collections.redis_store.RedisCollectionStore`.

    Parameters
    ----------
    redis_url:
        Redis connection URL used when a client is not directly supplied.
    namespace:
        Optional prefix for every key touched by the store. When set, the key
        ``"users"`` is stored as ``"<namespace>:users"``.
    socket_timeout_seconds:
        Per-call socket timeout passed to the Redis client. ``None`` keeps the
        client default (block until the server answers).
    """

    redis_url: str = "redis://127.0.0.1:6379/0"
    namespace: str | None = None
    socket_timeout_seconds: float | None = None

    def __post_init__(self) -> None:
        """Validate connection settings at construction time."""
        if not self.redis_url:
            raise ValueError("RedisStoreConfig.redis_url must be non-empty.")
        if self.namespace is not None and not self.namespace.strip():
            raise ValueError("RedisStoreConfig.namespace cannot be blank when provided.")
        if self.socket_timeout_seconds is not None and self.socket_timeout_seconds <= 0:
            raise ValueError("RedisStoreConfig.socket_timeout_seconds must be > 0.")


@dataclass(slots=True)
class CollectionOptions:
    """
    Behavior settings shared by collection handles.

    Parameters
    ----------
    scan_count:
        Number of elements requested per round-trip when a collection is
        enumerated or a score range is read lazily. Larger values mean fewer
        round-trips and bigger replies.
    """

    scan_count: int = 100

    def __post_init__(self) -> None:
        if self.scan_count <= 0:
            raise ValueError("CollectionOptions.scan_count must be >= 1.")
