"""
Remote sorted set.

Members are ordered by ascending score; equal scores are ordered by the
bytes of the serialized element, which is the store's own tie-break. Every
method here maps onto a single store primitive except the lazy readers,
which fetch one page per round-trip.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .base import RemoteObject

NEGATIVE_INFINITY = float("-inf")
POSITIVE_INFINITY = float("inf")


def _score_window(min_score: float, max_score: float) -> tuple[float, float]:
    low, high = float(min_score), float(max_score)
    if math.isnan(low) or math.isnan(high):
        raise ValueError("Score bounds must not be NaN.")
    return low, high


@dataclass(frozen=True, slots=True)
class SortedMember:
    """
    One sorted set entry.

    Parameters
    ----------
    score:
        Ordering key of the entry.
    value:
        Deserialized element.
    """

    score: float
    value: Any


class RemoteSortedSet(RemoteObject, Collection):
    """
    Sorted set of unique elements stored under one remote key.

    Adding an element that is already present replaces its score. Ranges with
    ``min > max`` or ranks that select nothing produce empty results rather
    than errors.
    """

    def _member(self, payload: bytes, score: float) -> SortedMember:
        return SortedMember(score=score, value=self._deserialize(payload))

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #

    def add_scored(self, score: float, item: Any) -> bool:
        """
        Upsert ``item`` with ``score``.

        Returns ``True`` when the item was new, ``False`` when only its score
        was replaced.
        """
        return self._store.sorted_add(self._key, {self._serialize(item): float(score)}) > 0

    def add_member(self, member: SortedMember) -> bool:
        """Upsert a :class:`SortedMember`."""
        return self.add_scored(member.score, member.value)

    def add_item(self, item: Any) -> bool:
        """Upsert ``item`` with score ``0.0``."""
        return self.add_scored(0.0, item)

    def add_range(self, members: Iterable[SortedMember | tuple[float, Any]]) -> int:
        """
        Upsert all ``members`` in one round-trip.

        Accepts :class:`SortedMember` objects or ``(score, value)`` pairs. When
        the same element appears twice, the last score wins.

        Returns
        -------
        int
            Number of elements that were not present before.
        """
        mapping: dict[bytes, float] = {}
        for member in members:
            if not isinstance(member, SortedMember):
                member = SortedMember(*member)
            mapping[self._serialize(member.value)] = float(member.score)
        return self._store.sorted_add(self._key, mapping)

    def increment_score(self, item: Any, delta: float) -> float:
        """
        Atomically add ``delta`` to the score of ``item`` and return the result.

        A missing item is created with score ``delta``.
        """
        return self._store.sorted_increment(self._key, self._serialize(item), float(delta))

    def remove(self, item: Any) -> bool:
        """Remove ``item``; return ``True`` when it was present."""
        return self._store.sorted_remove(self._key, [self._serialize(item)]) > 0

    def remove_range_by_score(self, min_score: float, max_score: float) -> int:
        """Remove members scoring within ``[min_score, max_score]`` and return how many."""
        low, high = _score_window(min_score, max_score)
        if low > high:
            return 0
        return self._store.sorted_remove_by_score(self._key, low, high)

    def remove_range_by_rank(self, start: int, stop: int) -> int:
        """
        Remove members between two inclusive ascending ranks.

        Negative ranks count from the highest score (``-1`` is the last member).
        """
        return self._store.sorted_remove_by_rank(self._key, int(start), int(stop))

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #

    def count(self) -> int:
        """Return total cardinality regardless of score."""
        return self._store.sorted_length(self._key)

    def count_by_score(
        self,
        min_score: float = NEGATIVE_INFINITY,
        max_score: float = POSITIVE_INFINITY,
    ) -> int:
        """Return how many members score within ``[min_score, max_score]``."""
        low, high = _score_window(min_score, max_score)
        if low > high:
            return 0
        return self._store.sorted_count(self._key, low, high)

    def contains(self, item: Any) -> bool:
        return self.score_of(item) is not None

    def score_of(self, item: Any) -> float | None:
        """Return the score of ``item``, or ``None`` when it is absent."""
        return self._store.sorted_score(self._key, self._serialize(item))

    def rank_of(self, item: Any, descending: bool = False) -> int | None:
        """
        Return the zero-based rank of ``item``, or ``None`` when it is absent.

        With ``descending`` the highest score has rank ``0``.
        """
        return self._store.sorted_rank(self._key, self._serialize(item), descending=descending)

    def get_range_by_score(
        self,
        min_score: float = NEGATIVE_INFINITY,
        max_score: float = POSITIVE_INFINITY,
        descending: bool = False,
        skip: int = 0,
        take: int = -1,
    ) -> Iterator[SortedMember]:
        """
        Lazily yield members scoring within ``[min_score, max_score]``.

        Members come in score order (reversed with ``descending``) and are
        fetched one page per round-trip. ``skip`` and ``take`` paginate the
        filtered range; a negative ``take`` yields everything after ``skip``.
        Pages are independent reads, so concurrent writes may shift members
        between pages.

        Raises
        ------
        ValueError
            Immediately, when a bound is NaN.
        """
        low, high = _score_window(min_score, max_score)
        return self._pages_by_score(low, high, descending, skip, take)

    def _pages_by_score(
        self,
        low: float,
        high: float,
        descending: bool,
        skip: int,
        take: int,
    ) -> Iterator[SortedMember]:
        if take == 0 or skip < 0 or low > high:
            return
        remaining = take if take > 0 else None
        offset = skip
        page_size = self._options.scan_count
        while True:
            size = page_size if remaining is None else min(page_size, remaining)
            rows = self._store.sorted_range_by_score(
                self._key,
                low,
                high,
                descending=descending,
                offset=offset,
                count=size,
            )
            for payload, score in rows:
                yield self._member(payload, score)
            if len(rows) < size:
                return
            offset += len(rows)
            if remaining is not None:
                remaining -= len(rows)
                if remaining <= 0:
                    return

    def get_range_by_rank(
        self,
        start: int = 0,
        stop: int = -1,
        descending: bool = False,
    ) -> Iterator[SortedMember]:
        """
        Yield members between two inclusive ranks.

        Ranks are zero-based under the requested ordering; negative ranks count
        from the end of that ordering. The window is read in one round-trip.
        """
        rows = self._store.sorted_range_by_rank(self._key, int(start), int(stop), descending=descending)
        for payload, score in rows:
            yield self._member(payload, score)

    def __contains__(self, item: object) -> bool:
        return self.contains(item)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Any]:
        """Lazily iterate element values in ascending score order."""
        for member in self.get_range_by_score():
            yield member.value
