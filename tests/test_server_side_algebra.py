"""
Server-side set algebra opt-in.
"""

from __future__ import annotations

import unittest

from distributed_sets import MemorySetStore, SetAlgebraStore, SetConfig, StringSet

from tests.doubles import FailingSetStore, RecordingSetStore


class ServerSideAlgebraTest(unittest.TestCase):
    """
    With ``server_side_algebra`` enabled, algebra is one store command.
    """

    def setUp(self) -> None:
        self.store = RecordingSetStore()
        self.config = SetConfig(server_side_algebra=True)

    def _pair(self, left: tuple[str, ...], right: tuple[str, ...]) -> tuple[StringSet, StringSet]:
        return (
            StringSet(self.store, "left", *left, config=self.config),
            StringSet(self.store, "right", *right, config=self.config),
        )

    def test_memory_store_supports_algebra(self) -> None:
        self.assertIsInstance(MemorySetStore(), SetAlgebraStore)
        self.assertNotIsInstance(FailingSetStore(), SetAlgebraStore)

    def test_union(self) -> None:
        left, right = self._pair(("x", "y"), ("y", "z"))
        self.store.calls.clear()
        left.union(right)
        self.assertEqual({"x", "y", "z"}, set(left.members()))
        self.assertEqual({"y", "z"}, set(right.members()))
        self.assertEqual([], self.store.commands("add_member"))

    def test_subtract(self) -> None:
        left, right = self._pair(("x", "y", "z"), ("y",))
        self.store.calls.clear()
        left.subtract(right)
        self.assertEqual({"x", "z"}, set(left.members()))
        self.assertEqual([], self.store.commands("remove_member"))

    def test_intersect(self) -> None:
        left, right = self._pair(("x", "y", "z"), ("y", "z", "w"))
        self.store.calls.clear()
        left.intersect(right)
        self.assertEqual({"y", "z"}, set(left.members()))
        self.assertEqual([], self.store.commands("is_member"))
        self.assertEqual(1, left.stats()["server_side_operations"])

    def test_intersect_with_empty_other_drops_key(self) -> None:
        left, right = self._pair(("x",), ())
        left.intersect(right)
        self.assertFalse(self.store.exists("left"))

    def test_falls_back_when_stores_differ(self) -> None:
        left = StringSet(self.store, "left", "x", config=self.config)
        right = StringSet(MemorySetStore(), "right", "y", config=self.config)
        left.union(right)
        self.assertEqual({"x", "y"}, set(left.members()))
        self.assertEqual(0, left.stats()["server_side_operations"])

    def test_disabled_by_default(self) -> None:
        left = StringSet(self.store, "left", "x", "y")
        right = StringSet(self.store, "right", "y")
        left.subtract(right)
        self.assertEqual(["x"], left.members())
        self.assertEqual(0, left.stats()["server_side_operations"])
        self.assertEqual([("remove_member", "left", "y")], self.store.commands("remove_member"))


class SetConfigTest(unittest.TestCase):
    """
    Separator configuration drives the text codec.
    """

    def test_custom_separator(self) -> None:
        handle = StringSet(MemorySetStore(), "codec", config=SetConfig(separator=";"))
        handle.parse("a; b;c,d")
        self.assertEqual({"a", "b", "c,d"}, set(handle.members()))
        self.assertEqual({"a", "b", "c,d"}, set(handle.render().split(";")))

    def test_empty_separator_rejected(self) -> None:
        with self.assertRaises(ValueError):
            SetConfig(separator="")


if __name__ == "__main__":
    unittest.main()
