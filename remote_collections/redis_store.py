"""
Redis-backed primitive store.

Each method issues exactly one Redis command, so the per-command atomicity
Redis guarantees carries over to every primitive. Connection faults are
reported as :class:`remote_collections.exceptions.StoreUnavailableError`;
retry and reconnect are left to the ``redis`` client.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Iterator, Mapping
from contextlib import contextmanager
from typing import Any

from redis import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import ResponseError
from redis.exceptions import TimeoutError as RedisTimeoutError

from .config import RedisStoreConfig
from .exceptions import StoreUnavailableError, WrongKeyTypeError

_LOGGER = logging.getLogger(__name__)


def _score_bound(value: float) -> str:
    """Format a score bound the way Redis range commands expect it."""
    value = float(value)
    if math.isinf(value):
        return "+inf" if value > 0 else "-inf"
    return repr(value)


def _as_bytes(value: bytes | str) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


class RedisCollectionStore:
    """
    Redis implementation of :class:`remote_collections.store_protocol.CollectionStore`.

    Data model
    ----------
    * unordered sets are Redis sets (``SADD``/``SREM``/``SSCAN``)
    * sorted sets are Redis sorted sets (``ZADD``/``ZRANGE``/``ZRANK``)
    * keys are optionally prefixed with ``config.namespace``

    Parameters
    ----------
    config:
        Connection settings used when ``redis_client`` is not supplied.
    redis_client:
        Optional preconfigured client. It must not use ``decode_responses``
        with a binary serializer.
    """

    def __init__(
        self,
        *,
        config: RedisStoreConfig | None = None,
        redis_client: Redis | None = None,
    ) -> None:
        self.config = config or RedisStoreConfig()
        if redis_client is None:
            options: dict[str, Any] = {}
            if self.config.socket_timeout_seconds is not None:
                options["socket_timeout"] = self.config.socket_timeout_seconds
            redis_client = Redis.from_url(self.config.redis_url, **options)
        self._redis = redis_client

    # ------------------------------------------------------------------ #
    # Key and error helpers
    # ------------------------------------------------------------------ #

    def _key(self, key: str) -> str:
        if self.config.namespace:
            return f"{self.config.namespace}:{key}"
        return key

    @contextmanager
    def _guard(self, key: str) -> Iterator[None]:
        try:
            yield
        except (RedisConnectionError, RedisTimeoutError) as exc:
            _LOGGER.warning("Redis store unavailable key=%s error=%s", key, exc)
            raise StoreUnavailableError(f"Redis store unavailable while accessing {key!r}.") from exc
        except ResponseError as exc:
            if str(exc).startswith("WRONGTYPE"):
                raise WrongKeyTypeError(f"Key {key!r} holds another collection type.") from exc
            raise

    def exists(self, key: str) -> bool:
        with self._guard(key):
            return bool(self._redis.exists(self._key(key)))

    def delete(self, key: str) -> bool:
        with self._guard(key):
            return bool(self._redis.delete(self._key(key)))

    # ------------------------------------------------------------------ #
    # Unordered sets
    # ------------------------------------------------------------------ #

    def set_add(self, key: str, payloads: Iterable[bytes]) -> int:
        values = list(payloads)
        if not values:
            return 0
        with self._guard(key):
            return int(self._redis.sadd(self._key(key), *values))

    def set_remove(self, key: str, payloads: Iterable[bytes]) -> int:
        values = list(payloads)
        if not values:
            return 0
        with self._guard(key):
            return int(self._redis.srem(self._key(key), *values))

    def set_contains(self, key: str, payload: bytes) -> bool:
        with self._guard(key):
            return bool(self._redis.sismember(self._key(key), payload))

    def set_length(self, key: str) -> int:
        with self._guard(key):
            return int(self._redis.scard(self._key(key)))

    def set_scan(self, key: str, *, count: int) -> Iterator[bytes]:
        with self._guard(key):
            for member in self._redis.sscan_iter(self._key(key), count=count):
                yield _as_bytes(member)

    def set_members(self, key: str) -> set[bytes]:
        with self._guard(key):
            return {_as_bytes(member) for member in self._redis.smembers(self._key(key))}

    # ------------------------------------------------------------------ #
    # Sorted sets
    # ------------------------------------------------------------------ #

    def sorted_add(self, key: str, mapping: Mapping[bytes, float]) -> int:
        scores = {payload: float(score) for payload, score in mapping.items()}
        if not scores:
            return 0
        if any(math.isnan(score) for score in scores.values()):
            raise ValueError("Sorted set scores cannot be NaN.")
        with self._guard(key):
            return int(self._redis.zadd(self._key(key), scores))

    def sorted_increment(self, key: str, payload: bytes, delta: float) -> float:
        with self._guard(key):
            try:
                return float(self._redis.zincrby(self._key(key), float(delta), payload))
            except ResponseError as exc:
                if "NaN" in str(exc):
                    raise ValueError("Resulting sorted set score would be NaN.") from exc
                raise

    def sorted_remove(self, key: str, payloads: Iterable[bytes]) -> int:
        values = list(payloads)
        if not values:
            return 0
        with self._guard(key):
            return int(self._redis.zrem(self._key(key), *values))

    def sorted_length(self, key: str) -> int:
        with self._guard(key):
            return int(self._redis.zcard(self._key(key)))

    def sorted_count(self, key: str, min_score: float, max_score: float) -> int:
        with self._guard(key):
            return int(self._redis.zcount(self._key(key), _score_bound(min_score), _score_bound(max_score)))

    def sorted_range_by_score(
        self,
        key: str,
        min_score: float,
        max_score: float,
        *,
        descending: bool = False,
        offset: int = 0,
        count: int = -1,
    ) -> list[tuple[bytes, float]]:
        if offset < 0:
            return []
        limit: dict[str, int] = {}
        if offset > 0 or count >= 0:
            limit = {"start": offset, "num": count}
        low = _score_bound(min_score)
        high = _score_bound(max_score)
        with self._guard(key):
            if descending:
                raw = self._redis.zrevrangebyscore(self._key(key), high, low, withscores=True, **limit)
            else:
                raw = self._redis.zrangebyscore(self._key(key), low, high, withscores=True, **limit)
        return [(_as_bytes(member), float(score)) for member, score in raw]

    def sorted_range_by_rank(
        self,
        key: str,
        start: int,
        stop: int,
        *,
        descending: bool = False,
    ) -> list[tuple[bytes, float]]:
        with self._guard(key):
            raw = self._redis.zrange(self._key(key), start, stop, desc=descending, withscores=True)
        return [(_as_bytes(member), float(score)) for member, score in raw]

    def sorted_remove_by_score(self, key: str, min_score: float, max_score: float) -> int:
        with self._guard(key):
            return int(
                self._redis.zremrangebyscore(
                    self._key(key), _score_bound(min_score), _score_bound(max_score)
                )
            )

    def sorted_remove_by_rank(self, key: str, start: int, stop: int) -> int:
        with self._guard(key):
            return int(self._redis.zremrangebyrank(self._key(key), start, stop))

    def sorted_rank(self, key: str, payload: bytes, *, descending: bool = False) -> int | None:
        with self._guard(key):
            if descending:
                rank = self._redis.zrevrank(self._key(key), payload)
            else:
                rank = self._redis.zrank(self._key(key), payload)
        return None if rank is None else int(rank)

    def sorted_score(self, key: str, payload: bytes) -> float | None:
        with self._guard(key):
            score = self._redis.zscore(self._key(key), payload)
        return None if score is None else float(score)
