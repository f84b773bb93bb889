"""
Backend factory helpers for easy store switching.

This module gives application developers a uniform way to pick a primitive
store by name without rewriting collection wiring code.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from .config import RedisStoreConfig
from .exceptions import BackendConfigurationError
from .redis_store import RedisCollectionStore
from .store import MemoryCollectionStore
from .store_protocol import CollectionStore


class StoreBackend(str, Enum):
    """
    Built-in backend names supported by the factory helpers.

    MEMORY
        In-process in-memory store.
    REDIS
        Centralized Redis store.
    """

    MEMORY = "memory"
    REDIS = "redis"


def _normalize_backend(backend: str | StoreBackend) -> StoreBackend:
    """
    Normalize backend name into :class:`StoreBackend` enum value.
    """
    if isinstance(backend, StoreBackend):
        return backend
    lowered = str(backend).strip().lower()
    try:
        return StoreBackend(lowered)
    except ValueError as exc:
        valid = ", ".join(item.value for item in StoreBackend)
        raise BackendConfigurationError(
            f"Unknown backend {backend!r}. Supported values: {valid}."
        ) from exc


def available_backends() -> tuple[str, ...]:
    """
    Return the backend names accepted by :func:`create_store`.
    """
    return tuple(item.value for item in StoreBackend)


def create_store(backend: str | StoreBackend = StoreBackend.MEMORY, **backend_options: Any) -> CollectionStore:
    """
    Create a primitive store instance from a short backend name.

    Parameters
    ----------
    backend:
        Backend selector string (``"memory"`` or ``"redis"``).
    backend_options:
        Backend-specific options.

        Redis options:
            ``redis_url`` (str), ``namespace`` (str),
            ``socket_timeout_seconds`` (float), ``redis_client``
            and an optional ready-made ``config`` object.
    """
    selected = _normalize_backend(backend)
    if selected is StoreBackend.MEMORY:
        if backend_options:
            unknown = ", ".join(sorted(str(key) for key in backend_options))
            raise BackendConfigurationError(
                f"Memory backend does not accept options: {unknown}."
            )
        return MemoryCollectionStore()
    if selected is StoreBackend.REDIS:
        config = backend_options.pop("config", None)
        redis_client = backend_options.pop("redis_client", None)
        if config is None:
            config = RedisStoreConfig(
                redis_url=str(backend_options.pop("redis_url", "redis://127.0.0.1:6379/0")),
                namespace=backend_options.pop("namespace", None),
                socket_timeout_seconds=backend_options.pop("socket_timeout_seconds", None),
            )
        if backend_options:
            unknown = ", ".join(sorted(str(key) for key in backend_options))
            raise BackendConfigurationError(
                f"Unknown Redis backend options: {unknown}."
            )
        return RedisCollectionStore(config=config, redis_client=redis_client)
    raise BackendConfigurationError(f"Unhandled backend: {selected!r}")
