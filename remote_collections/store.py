"""
Thread-safe in-memory primitive store.

The store mirrors the Redis command semantics the collections rely on, so
collection handles behave the same against it as against a Redis server.
It is used for tests and single-process development.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from threading import RLock

from .exceptions import WrongKeyTypeError


def _rank_window(length: int, start: int, stop: int) -> tuple[int, int] | None:
    """
    Resolve inclusive, possibly negative ranks against ``length``.

    Returns ``None`` when the window selects nothing.
    """
    if start < 0:
        start += length
    if stop < 0:
        stop += length
    start = max(start, 0)
    if start > stop or start >= length:
        return None
    return start, min(stop, length - 1)


class MemoryCollectionStore:
    """
    Concurrent in-process storage for unordered and sorted sets.

    Notes
    -----
    * Each public method holds one lock for its whole duration, which makes
      every primitive atomic just like a single Redis command.
    * Keys are dropped as soon as their collection becomes empty.
    * Sorted members are ordered by ``(score, payload)``; ``bytes`` comparison
      matches the byte-wise tie-break Redis applies.
    """

    def __init__(self) -> None:
        self._sets: dict[str, set[bytes]] = {}
        self._sorted: dict[str, dict[bytes, float]] = {}
        self._lock = RLock()

    # ------------------------------------------------------------------ #
    # Key helpers
    # ------------------------------------------------------------------ #

    def _set_for_read(self, key: str) -> set[bytes]:
        if key in self._sorted:
            raise WrongKeyTypeError(f"Key {key!r} holds a sorted set, not a set.")
        return self._sets.get(key, set())

    def _sorted_for_read(self, key: str) -> dict[bytes, float]:
        if key in self._sets:
            raise WrongKeyTypeError(f"Key {key!r} holds a set, not a sorted set.")
        return self._sorted.get(key, {})

    def _drop_if_empty(self, key: str) -> None:
        if key in self._sets and not self._sets[key]:
            del self._sets[key]
        if key in self._sorted and not self._sorted[key]:
            del self._sorted[key]

    def _ordered(self, key: str) -> list[tuple[bytes, float]]:
        members = self._sorted_for_read(key)
        return sorted(members.items(), key=lambda item: (item[1], item[0]))

    def exists(self, key: str) -> bool:
        with self._lock:
            return key in self._sets or key in self._sorted

    def delete(self, key: str) -> bool:
        with self._lock:
            existed = key in self._sets or key in self._sorted
            self._sets.pop(key, None)
            self._sorted.pop(key, None)
            return existed

    # ------------------------------------------------------------------ #
    # Unordered sets
    # ------------------------------------------------------------------ #

    def set_add(self, key: str, payloads: Iterable[bytes]) -> int:
        with self._lock:
            self._set_for_read(key)
            target = self._sets.setdefault(key, set())
            before = len(target)
            target.update(bytes(payload) for payload in payloads)
            added = len(target) - before
            self._drop_if_empty(key)
            return added

    def set_remove(self, key: str, payloads: Iterable[bytes]) -> int:
        with self._lock:
            target = self._set_for_read(key)
            removed = 0
            for payload in set(payloads):
                if payload in target:
                    target.remove(payload)
                    removed += 1
            self._drop_if_empty(key)
            return removed

    def set_contains(self, key: str, payload: bytes) -> bool:
        with self._lock:
            return payload in self._set_for_read(key)

    def set_length(self, key: str) -> int:
        with self._lock:
            return len(self._set_for_read(key))

    def set_scan(self, key: str, *, count: int) -> Iterator[bytes]:
        with self._lock:
            snapshot = list(self._set_for_read(key))
        for index in range(0, len(snapshot), count):
            yield from snapshot[index:index + count]

    def set_members(self, key: str) -> set[bytes]:
        with self._lock:
            return set(self._set_for_read(key))

    # ------------------------------------------------------------------ #
    # Sorted sets
    # ------------------------------------------------------------------ #

    def sorted_add(self, key: str, mapping: Mapping[bytes, float]) -> int:
        scores = {bytes(payload): float(score) for payload, score in mapping.items()}
        if any(math.isnan(score) for score in scores.values()):
            raise ValueError("Sorted set scores cannot be NaN.")
        with self._lock:
            self._sorted_for_read(key)
            target = self._sorted.setdefault(key, {})
            added = sum(1 for payload in scores if payload not in target)
            target.update(scores)
            self._drop_if_empty(key)
            return added

    def sorted_increment(self, key: str, payload: bytes, delta: float) -> float:
        with self._lock:
            score = self._sorted_for_read(key).get(payload, 0.0) + float(delta)
            if math.isnan(score):
                raise ValueError("Resulting sorted set score would be NaN.")
            self._sorted.setdefault(key, {})[bytes(payload)] = score
            return score

    def sorted_remove(self, key: str, payloads: Iterable[bytes]) -> int:
        with self._lock:
            target = self._sorted_for_read(key)
            removed = 0
            for payload in set(payloads):
                if target.pop(payload, None) is not None:
                    removed += 1
            self._drop_if_empty(key)
            return removed

    def sorted_length(self, key: str) -> int:
        with self._lock:
            return len(self._sorted_for_read(key))

    def sorted_count(self, key: str, min_score: float, max_score: float) -> int:
        with self._lock:
            members = self._sorted_for_read(key)
            return sum(1 for score in members.values() if min_score <= score <= max_score)

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
        with self._lock:
            selected = [
                (payload, score)
                for payload, score in self._ordered(key)
                if min_score <= score <= max_score
            ]
        if descending:
            selected.reverse()
        if offset < 0:
            return []
        if count < 0:
            return selected[offset:]
        return selected[offset:offset + count]

    def sorted_range_by_rank(
        self,
        key: str,
        start: int,
        stop: int,
        *,
        descending: bool = False,
    ) -> list[tuple[bytes, float]]:
        with self._lock:
            ordered = self._ordered(key)
        if descending:
            ordered.reverse()
        window = _rank_window(len(ordered), start, stop)
        if window is None:
            return []
        return ordered[window[0]:window[1] + 1]

    def sorted_remove_by_score(self, key: str, min_score: float, max_score: float) -> int:
        with self._lock:
            target = self._sorted_for_read(key)
            doomed = [payload for payload, score in target.items() if min_score <= score <= max_score]
            for payload in doomed:
                del target[payload]
            self._drop_if_empty(key)
            return len(doomed)

    def sorted_remove_by_rank(self, key: str, start: int, stop: int) -> int:
        with self._lock:
            ordered = self._ordered(key)
            window = _rank_window(len(ordered), start, stop)
            if window is None:
                return 0
            target = self._sorted[key]
            doomed = ordered[window[0]:window[1] + 1]
            for payload, _ in doomed:
                del target[payload]
            self._drop_if_empty(key)
            return len(doomed)

    def sorted_rank(self, key: str, payload: bytes, *, descending: bool = False) -> int | None:
        with self._lock:
            ordered = self._ordered(key)
        for rank, (candidate, _) in enumerate(ordered):
            if candidate == payload:
                return len(ordered) - 1 - rank if descending else rank
        return None

    def sorted_score(self, key: str, payload: bytes) -> float | None:
        with self._lock:
            return self._sorted_for_read(key).get(payload)
