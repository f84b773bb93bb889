"""
Behavior tests for :class:`remote_collections.RemoteSet` on the in-memory store.
"""

from __future__ import annotations

import unittest

from remote_collections import (
    CollectionOptions,
    MemoryCollectionStore,
    RemoteSet,
    RemoteSortedSet,
    WrongKeyTypeError,
)


class RemoteSetTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryCollectionStore()
        self.options = CollectionOptions(scan_count=2)
        self.tags = RemoteSet(self.store, "tags", options=self.options)

    def make_set(self, key: str, *items: object) -> RemoteSet:
        remote = RemoteSet(self.store, key, options=self.options)
        remote.add_range(items)
        return remote


class PrimitiveOperationTests(RemoteSetTestCase):
    def test_add_is_idempotent(self) -> None:
        self.assertTrue(self.tags.add("python"))
        self.assertEqual(self.tags.count(), 1)
        self.assertFalse(self.tags.add("python"))
        self.assertEqual(self.tags.count(), 1)

    def test_add_range_returns_new_count(self) -> None:
        self.tags.add("a")
        self.assertEqual(self.tags.add_range(["a", "b", "c", "c"]), 2)
        self.assertEqual(len(self.tags), 3)

    def test_add_range_with_no_items_does_not_create_key(self) -> None:
        self.assertEqual(self.tags.add_range([]), 0)
        self.assertFalse(self.tags.exists())

    def test_remove_reports_presence(self) -> None:
        self.tags.add("a")
        self.assertTrue(self.tags.remove("a"))
        self.assertFalse(self.tags.remove("a"))

    def test_discard_missing_item_is_noop(self) -> None:
        self.tags.discard("missing")
        self.assertEqual(len(self.tags), 0)

    def test_key_disappears_when_empty(self) -> None:
        self.tags.add("a")
        self.assertTrue(self.tags.exists())
        self.tags.remove("a")
        self.assertFalse(self.tags.exists())

    def test_contains_uses_serialized_equality(self) -> None:
        self.tags.add({"b": 2, "a": 1})
        self.assertIn({"a": 1, "b": 2}, self.tags)
        self.assertTrue(self.tags.contains({"a": 1, "b": 2}))
        self.assertNotIn({"a": 1}, self.tags)

    def test_remove_range_and_remove_where(self) -> None:
        self.tags.add_range(range(10))
        self.assertEqual(self.tags.remove_range([0, 1, 99]), 2)
        removed = self.tags.remove_where(lambda value: value % 2 == 0)
        self.assertEqual(removed, 4)
        self.assertEqual(sorted(self.tags), [3, 5, 7, 9])

    def test_iteration_spans_several_scan_batches(self) -> None:
        self.tags.add_range(["a", "b", "c", "d", "e"])
        self.assertEqual(sorted(self.tags), ["a", "b", "c", "d", "e"])
        self.assertEqual(sorted(self.tags), ["a", "b", "c", "d", "e"])

    def test_members_snapshot(self) -> None:
        self.tags.add_range([1, 2])
        self.assertEqual(sorted(self.tags.members()), [1, 2])

    def test_handles_share_remote_state(self) -> None:
        other_handle = RemoteSet(self.store, "tags")
        self.tags.add("shared")
        self.assertIn("shared", other_handle)
        other_handle.clear()
        self.assertEqual(self.tags.count(), 0)

    def test_key_of_other_type_is_rejected(self) -> None:
        RemoteSortedSet(self.store, "board").add_scored(1.0, "a")
        with self.assertRaises(WrongKeyTypeError):
            RemoteSet(self.store, "board").add("a")

    def test_empty_key_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            RemoteSet(self.store, "")


class SetAlgebraTests(RemoteSetTestCase):
    def test_union_then_superset(self) -> None:
        self.tags.add_range([1, 2])
        other = [2, 3, 4]
        self.tags.union_with(other)
        self.assertTrue(self.tags.is_superset_of(other))
        self.assertEqual(sorted(self.tags), [1, 2, 3, 4])

    def test_except_then_no_overlap(self) -> None:
        self.tags.add_range([1, 2, 3])
        self.tags.except_with([2, 3, 5])
        self.assertFalse(self.tags.overlaps([2, 3, 5]))
        self.assertEqual(sorted(self.tags), [1])

    def test_intersect_with_list(self) -> None:
        self.tags.add_range(["a", "b", "c"])
        self.tags.intersect_with(["b", "c", "z"])
        self.assertEqual(sorted(self.tags), ["b", "c"])

    def test_intersect_with_empty_removes_everything(self) -> None:
        self.tags.add_range(["a", "b"])
        self.tags.intersect_with([])
        self.assertFalse(self.tags.exists())

    def test_intersect_with_remote_set(self) -> None:
        self.tags.add_range([1, 2, 3])
        other = self.make_set("other", 2, 3, 4)
        self.tags.intersect_with(other)
        self.assertEqual(sorted(self.tags), [2, 3])
        self.assertEqual(sorted(other), [2, 3, 4])

    def test_symmetric_except_with_toggles_distinct_items(self) -> None:
        self.tags.add_range([1, 2, 3])
        self.tags.symmetric_except_with([3, 4, 4])
        self.assertEqual(sorted(self.tags), [1, 2, 4])

    def test_subset_and_proper_subset_of_equal_sets(self) -> None:
        self.tags.add_range([1, 2])
        self.assertTrue(self.tags.is_subset_of({1, 2}))
        self.assertFalse(self.tags.is_proper_subset_of({1, 2}))
        self.assertTrue(self.tags.is_proper_subset_of({1, 2, 3}))
        self.assertFalse(self.tags.is_subset_of({1, 3, 4}))

    def test_subset_of_plain_iterable_ignores_duplicates(self) -> None:
        self.tags.add_range([1, 2])
        self.assertTrue(self.tags.is_subset_of([1, 1, 2]))
        self.assertFalse(self.tags.is_proper_subset_of([2, 1, 2, 1]))
        self.assertTrue(self.tags.is_proper_subset_of(iter([3, 2, 1])))

    def test_superset_checks(self) -> None:
        self.tags.add_range([1, 2, 3])
        self.assertTrue(self.tags.is_superset_of([1, 2]))
        self.assertTrue(self.tags.is_proper_superset_of({1, 2}))
        self.assertTrue(self.tags.is_superset_of({1, 2, 3}))
        self.assertFalse(self.tags.is_proper_superset_of([1, 2, 3, 3]))
        self.assertFalse(self.tags.is_superset_of([1, 4]))

    def test_empty_set_is_subset_of_everything(self) -> None:
        self.assertTrue(self.tags.is_subset_of([]))
        self.assertTrue(self.tags.is_proper_subset_of(["a"]))
        self.assertTrue(self.tags.is_superset_of([]))

    def test_subset_against_remote_set(self) -> None:
        self.tags.add_range(["a"])
        other = self.make_set("other", "a", "b")
        self.assertTrue(self.tags.is_proper_subset_of(other))
        self.assertTrue(other.is_proper_superset_of(self.tags))

    def test_local_set_checks_handle_unhashable_elements(self) -> None:
        self.tags.add({"x": 1})
        self.assertFalse(self.tags.is_subset_of({(1, 2), (3, 4)}))
        self.assertFalse(self.tags.is_subset_of(frozenset()))
        self.assertTrue(self.tags.is_superset_of(frozenset()))
        self.assertFalse(self.tags.set_equals({(1, 2)}))

    def test_local_set_checks_compare_payloads(self) -> None:
        self.tags.add(1.0)
        self.assertFalse(self.tags.contains(1))
        self.assertFalse(self.tags.is_subset_of({1}))
        self.assertFalse(self.tags.is_superset_of({1}))
        self.assertFalse(self.tags.set_equals({1}))
        self.assertTrue(self.tags.is_subset_of({1.0}))

    def test_local_set_of_equal_values_counts_distinct_payloads(self) -> None:
        self.tags.add_range([1, True])
        self.assertEqual(self.tags.count(), 2)
        self.assertFalse(self.tags.set_equals({1, True}))
        self.assertTrue(self.tags.set_equals([1, True]))
        self.assertTrue(self.tags.is_superset_of({1}))
        self.assertFalse(self.tags.is_proper_subset_of({1, 2}))

    def test_overlaps(self) -> None:
        self.tags.add_range(["a", "b"])
        self.assertTrue(self.tags.overlaps(["z", "b"]))
        self.assertFalse(self.tags.overlaps(["z"]))
        self.assertFalse(self.tags.overlaps([]))

    def test_set_equals(self) -> None:
        self.tags.add_range([1, 2, 3])
        self.assertTrue(self.tags.set_equals([3, 2, 1, 1]))
        self.assertTrue(self.tags.set_equals({1, 2, 3}))
        self.assertFalse(self.tags.set_equals([1, 2]))
        self.assertFalse(self.tags.set_equals([1, 2, 4]))
        self.assertFalse(self.tags.set_equals({1, 2, 3, 4}))


class OperatorTests(RemoteSetTestCase):
    def test_comparison_operators(self) -> None:
        self.tags.add_range([1, 2])
        self.assertTrue(self.tags <= {1, 2, 3})
        self.assertTrue(self.tags < {1, 2, 3})
        self.assertTrue(self.tags == {1, 2})
        self.assertTrue(self.tags.isdisjoint({5, 6}))

    def test_binary_operators_return_local_sets(self) -> None:
        self.tags.add_range([1, 2])
        union = self.tags | {3}
        self.assertIsInstance(union, set)
        self.assertEqual(union, {1, 2, 3})
        self.assertEqual(self.tags & {2, 9}, {2})
        self.assertEqual(self.tags - {1}, {2})

    def test_in_place_operators_mutate_remote_state(self) -> None:
        self.tags.add_range([1, 2, 3])
        self.tags |= [4]
        self.tags &= [1, 2, 4]
        self.tags -= [1]
        self.tags ^= [2, 5]
        self.assertEqual(sorted(self.tags), [4, 5])
        self.assertIsInstance(self.tags, RemoteSet)

    def test_xor_with_itself_clears(self) -> None:
        self.tags.add_range([1, 2])
        self.tags ^= self.tags
        self.assertEqual(len(self.tags), 0)

    def test_pop_removes_one_element(self) -> None:
        self.tags.add("only")
        self.assertEqual(self.tags.pop(), "only")
        with self.assertRaises(KeyError):
            self.tags.pop()


if __name__ == "__main__":
    unittest.main()
