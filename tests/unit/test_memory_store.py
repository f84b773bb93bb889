"""
Primitive-level tests for :class:`remote_collections.MemoryCollectionStore`.
"""

from __future__ import annotations

import unittest

from remote_collections import MemoryCollectionStore, WrongKeyTypeError


class MemoryStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryCollectionStore()
        self.store.sorted_add("z", {b"a": 1.0, b"b": 2.0, b"c": 2.0, b"d": 4.0})

    def test_delete_reports_existence(self) -> None:
        self.assertTrue(self.store.delete("z"))
        self.assertFalse(self.store.delete("z"))
        self.assertFalse(self.store.exists("z"))

    def test_ties_order_by_payload_bytes(self) -> None:
        rows = self.store.sorted_range_by_rank("z", 0, -1)
        self.assertEqual([payload for payload, _ in rows], [b"a", b"b", b"c", b"d"])
        self.assertEqual(self.store.sorted_rank("z", b"c"), 2)
        self.assertEqual(self.store.sorted_rank("z", b"c", descending=True), 1)

    def test_rank_windows_clamp_like_redis(self) -> None:
        self.assertEqual(len(self.store.sorted_range_by_rank("z", -100, 100)), 4)
        self.assertEqual(self.store.sorted_range_by_rank("z", 3, 1), [])
        self.assertEqual(self.store.sorted_remove_by_rank("z", 4, 10), 0)

    def test_score_range_pagination(self) -> None:
        rows = self.store.sorted_range_by_score("z", 2.0, 4.0, descending=True, offset=1, count=1)
        self.assertEqual(rows, [(b"c", 2.0)])
        self.assertEqual(self.store.sorted_range_by_score("z", 2.0, 4.0, offset=-1), [])

    def test_removing_last_member_drops_key(self) -> None:
        self.assertEqual(self.store.sorted_remove_by_score("z", float("-inf"), float("inf")), 4)
        self.assertFalse(self.store.exists("z"))
        self.store.set_add("s", [b"x"])
        self.store.set_remove("s", [b"x", b"x"])
        self.assertFalse(self.store.exists("s"))

    def test_wrong_type_access(self) -> None:
        with self.assertRaises(WrongKeyTypeError):
            self.store.set_length("z")
        self.store.set_add("s", [b"x"])
        with self.assertRaises(WrongKeyTypeError):
            self.store.sorted_score("s", b"x")

    def test_scan_is_a_snapshot(self) -> None:
        self.store.set_add("s", [b"1", b"2", b"3"])
        scan = self.store.set_scan("s", count=1)
        first = next(scan)
        self.store.set_add("s", [b"4"])
        rest = list(scan)
        self.assertEqual(sorted([first] + rest), [b"1", b"2", b"3"])


if __name__ == "__main__":
    unittest.main()
