"""
Remote unordered set.

Single-element operations map onto one store primitive and are atomic.
The set-algebra methods are composite algorithms built from several
primitives; they are NOT atomic. A concurrent writer can interleave with
them, so their outcome may not match any single before/after snapshot of
the set, and a failure halfway through leaves the earlier steps applied.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator, MutableSet
from typing import Any

from .base import RemoteObject

_LOGGER = logging.getLogger(__name__)


class RemoteSet(RemoteObject, MutableSet):
    """
    Set of unique elements stored under one remote key.

    Uniqueness is decided on serialized payloads. The standard set operators
    (``<=``, ``|``, ``&`` ...) work through :class:`collections.abc.Set`; the
    non-mutating ones return plain local :class:`set` objects.
    """

    @classmethod
    def _from_iterable(cls, it: Iterable[Any]) -> set[Any]:
        return set(it)

    def _scan_payloads(self) -> Iterator[bytes]:
        return self._store.set_scan(self._key, count=self._options.scan_count)

    def _payloads(self, other: Iterable[Any]) -> set[bytes]:
        return {self._serialize(item) for item in other}

    # ------------------------------------------------------------------ #
    # Primitive operations
    # ------------------------------------------------------------------ #

    def add(self, item: Any) -> bool:
        """Add ``item``; return ``True`` when it was not already present."""
        return self._store.set_add(self._key, [self._serialize(item)]) > 0

    def add_range(self, items: Iterable[Any]) -> int:
        """Add all ``items`` in one round-trip and return how many were new."""
        return self._store.set_add(self._key, [self._serialize(item) for item in items])

    def remove(self, item: Any) -> bool:
        """Remove ``item``; return ``True`` when it was present."""
        return self._store.set_remove(self._key, [self._serialize(item)]) > 0

    def discard(self, item: Any) -> None:
        self.remove(item)

    def remove_range(self, items: Iterable[Any]) -> int:
        """Remove all ``items`` in one round-trip and return how many were present."""
        return self._store.set_remove(self._key, [self._serialize(item) for item in items])

    def remove_where(self, predicate: Callable[[Any], bool]) -> int:
        """
        Remove every element matching ``predicate``.

        All elements are read first and filtered locally, then removed with one
        bulk call. Elements added after the read are never considered;
        elements removed concurrently are skipped silently.

        Returns
        -------
        int
            Number of elements actually removed.
        """
        doomed = [payload for payload in self._scan_payloads() if predicate(self._deserialize(payload))]
        removed = self._store.set_remove(self._key, doomed)
        _LOGGER.debug("remove_where key=%s matched=%s removed=%s", self._key, len(doomed), removed)
        return removed

    def contains(self, item: Any) -> bool:
        """Return ``True`` when ``item`` is a member (one round-trip)."""
        return self._store.set_contains(self._key, self._serialize(item))

    def count(self) -> int:
        """Return the remote cardinality; never cached."""
        return self._store.set_length(self._key)

    def members(self) -> list[Any]:
        """Return every element, fetched in a single round-trip."""
        return [self._deserialize(payload) for payload in self._store.set_members(self._key)]

    def __contains__(self, item: object) -> bool:
        return self.contains(item)

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[Any]:
        """
        Lazily iterate elements over a fresh store scan cursor.

        No order is guaranteed. Elements added or removed during the scan may
        or may not be produced, and the store may produce an element twice.
        """
        for payload in self._scan_payloads():
            yield self._deserialize(payload)

    # ------------------------------------------------------------------ #
    # Set algebra
    # ------------------------------------------------------------------ #

    def except_with(self, other: Iterable[Any]) -> None:
        """Remove every element of ``other``; absent elements are ignored."""
        self.remove_range(list(other))

    def intersect_with(self, other: Iterable[Any]) -> None:
        """
        Keep only elements that are also in ``other``.

        Two phases: collect the members missing from ``other`` by scanning the
        set, then remove them in one bulk call.
        """
        keep = self._payloads(other)
        doomed = [payload for payload in self._scan_payloads() if payload not in keep]
        removed = self._store.set_remove(self._key, doomed)
        _LOGGER.debug("intersect_with key=%s kept=%s removed=%s", self._key, len(keep), removed)

    def union_with(self, other: Iterable[Any]) -> None:
        """Add every element of ``other`` with one idempotent bulk add."""
        self.add_range(list(other))

    def symmetric_except_with(self, other: Iterable[Any]) -> None:
        """
        Toggle membership of every distinct element of ``other``.

        Elements present are removed, absent ones added; one membership test
        and one mutation per element.
        """
        seen: set[bytes] = set()
        for item in other:
            payload = self._serialize(item)
            if payload in seen:
                continue
            seen.add(payload)
            if self._store.set_contains(self._key, payload):
                self._store.set_remove(self._key, [payload])
            else:
                self._store.set_add(self._key, [payload])

    def is_subset_of(self, other: Iterable[Any], proper: bool = False) -> bool:
        """
        Return ``True`` when every element of this set is in ``other``.

        Cardinalities are compared first. Unless ``other`` is another
        :class:`RemoteSet`, it is buffered locally as serialized payloads, so
        membership is decided on payload bytes exactly as the store does.
        """
        own_count = self.count()
        if isinstance(other, RemoteSet):
            other_count = other.count()
            if other_count < own_count or (proper and other_count == own_count):
                return False
            return all(other.contains(item) for item in self)
        payloads = self._payloads(other)
        if len(payloads) < own_count or (proper and len(payloads) == own_count):
            return False
        return all(payload in payloads for payload in self._scan_payloads())

    def is_proper_subset_of(self, other: Iterable[Any]) -> bool:
        return self.is_subset_of(other, proper=True)

    def is_superset_of(self, other: Iterable[Any], proper: bool = False) -> bool:
        """
        Return ``True`` when every element of ``other`` is in this set.

        Cardinalities are compared first, then each element of ``other`` is
        tested remotely, stopping at the first miss.
        """
        own_count = self.count()
        if isinstance(other, RemoteSet):
            other_count = other.count()
            if own_count < other_count or (proper and other_count == own_count):
                return False
            return all(self.contains(item) for item in other)
        payloads = self._payloads(other)
        if own_count < len(payloads) or (proper and len(payloads) == own_count):
            return False
        return all(self._store.set_contains(self._key, payload) for payload in payloads)

    def is_proper_superset_of(self, other: Iterable[Any]) -> bool:
        return self.is_superset_of(other, proper=True)

    def overlaps(self, other: Iterable[Any]) -> bool:
        """Return ``True`` at the first element of ``other`` found in this set."""
        return any(self.contains(item) for item in other)

    def set_equals(self, other: Iterable[Any]) -> bool:
        """
        Return ``True`` when this set and ``other`` hold the same elements.

        Duplicates in ``other`` are counted once, by payload. Stops at the first
        element of ``other`` missing from this set.
        """
        if isinstance(other, RemoteSet):
            if other.count() != self.count():
                return False
            return all(self.contains(item) for item in other)
        seen: set[bytes] = set()
        for item in other:
            payload = self._serialize(item)
            if payload in seen:
                continue
            if not self._store.set_contains(self._key, payload):
                return False
            seen.add(payload)
        return len(seen) == self.count()

    # ------------------------------------------------------------------ #
    # In-place operators
    # ------------------------------------------------------------------ #

    def __ior__(self, other: Iterable[Any]) -> "RemoteSet":
        self.union_with(other)
        return self

    def __iand__(self, other: Iterable[Any]) -> "RemoteSet":
        self.intersect_with(other)
        return self

    def __isub__(self, other: Iterable[Any]) -> "RemoteSet":
        self.except_with(other)
        return self

    def __ixor__(self, other: Iterable[Any]) -> "RemoteSet":
        if other is self:
            self.clear()
        else:
            self.symmetric_except_with(other)
        return self
