"""
Primitive store protocol used by remote collection handles.

Collections depend on this method surface rather than on a concrete client,
which lets the same set algebra run against Redis or the in-process store
used for tests and local development.

Every method is one primitive: implementations must make each call atomic
with respect to other calls on the same key. Element payloads are ``bytes``
and scores are ``float``. Empty collections do not exist; reading an absent
key behaves like reading an empty collection.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Protocol


class CollectionStore(Protocol):
    """Behavioral contract for unordered-set and sorted-set primitives."""

    # ------------------------------------------------------------------ #
    # Keys
    # ------------------------------------------------------------------ #

    def exists(self, key: str) -> bool:
        """Return true when ``key`` holds a non-empty collection."""

    def delete(self, key: str) -> bool:
        """Delete ``key`` and return true when it existed."""

    # ------------------------------------------------------------------ #
    # Unordered sets
    # ------------------------------------------------------------------ #

    def set_add(self, key: str, payloads: Iterable[bytes]) -> int:
        """Add payloads and return how many were not already members."""

    def set_remove(self, key: str, payloads: Iterable[bytes]) -> int:
        """Remove payloads and return how many were members."""

    def set_contains(self, key: str, payload: bytes) -> bool:
        """Return true when ``payload`` is a member."""

    def set_length(self, key: str) -> int:
        """Return set cardinality."""

    def set_scan(self, key: str, *, count: int) -> Iterator[bytes]:
        """Lazily iterate members, fetching about ``count`` per round-trip."""

    def set_members(self, key: str) -> set[bytes]:
        """Return all members in one round-trip."""

    # ------------------------------------------------------------------ #
    # Sorted sets
    # ------------------------------------------------------------------ #

    def sorted_add(self, key: str, mapping: Mapping[bytes, float]) -> int:
        """Upsert payload scores and return how many payloads were new."""

    def sorted_increment(self, key: str, payload: bytes, delta: float) -> float:
        """Add ``delta`` to the payload score (missing counts as 0) and return it."""

    def sorted_remove(self, key: str, payloads: Iterable[bytes]) -> int:
        """Remove payloads and return how many were members."""

    def sorted_length(self, key: str) -> int:
        """Return sorted set cardinality."""

    def sorted_count(self, key: str, min_score: float, max_score: float) -> int:
        """Return how many members score within ``[min_score, max_score]``."""

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
        """Return ``(payload, score)`` pairs within the score range, paginated."""

    def sorted_range_by_rank(
        self,
        key: str,
        start: int,
        stop: int,
        *,
        descending: bool = False,
    ) -> list[tuple[bytes, float]]:
        """Return ``(payload, score)`` pairs between two inclusive ranks."""

    def sorted_remove_by_score(self, key: str, min_score: float, max_score: float) -> int:
        """Remove members within the score range and return how many."""

    def sorted_remove_by_rank(self, key: str, start: int, stop: int) -> int:
        """Remove members between two inclusive ascending ranks and return how many."""

    def sorted_rank(self, key: str, payload: bytes, *, descending: bool = False) -> int | None:
        """Return zero-based rank of ``payload`` or ``None`` when absent."""

    def sorted_score(self, key: str, payload: bytes) -> float | None:
        """Return score of ``payload`` or ``None`` when absent."""
