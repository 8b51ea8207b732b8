"""
Integration tests against a live Redis server.

Set ``DISTRIBUTED_SETS_REDIS_URL`` (for example ``redis://127.0.0.1:6379/15``)
to run them. Every test uses a unique namespace and deletes its keys.
"""

from __future__ import annotations

import os
import threading
import unittest
import uuid

from distributed_sets import SetConfig, StringSet, create_store, deduplicate

REDIS_URL = os.environ.get("DISTRIBUTED_SETS_REDIS_URL", "")


@unittest.skipUnless(REDIS_URL, "DISTRIBUTED_SETS_REDIS_URL is not set")
class RedisStringSetIntegrationTest(unittest.TestCase):
    """
    End-to-end handle behavior over a real Redis connection.
    """

    def setUp(self) -> None:
        self.namespace = f"it-{uuid.uuid4().hex}"
        self.store = create_store("redis", redis_url=REDIS_URL, namespace=self.namespace)
        self.addCleanup(self._cleanup)

    def _cleanup(self) -> None:
        client = self.store.client
        keys = list(client.scan_iter(match=f"{self.namespace}:*"))
        if keys:
            client.delete(*keys)
        client.close()

    def test_membership_and_case_folding(self) -> None:
        tags = StringSet(self.store, "tags", "Python", "REDIS")
        self.assertTrue(tags.has("python"))
        self.assertEqual({"python", "redis"}, set(tags.members()))
        tags.remove("Redis")
        self.assertEqual(1, len(tags))

    def test_client_side_algebra(self) -> None:
        left = StringSet(self.store, "left", "x", "y", "z")
        right = StringSet(self.store, "right", "y", "z", "w")
        left.intersect(right)
        self.assertEqual({"y", "z"}, set(left.members()))
        left.union(right)
        self.assertEqual({"y", "z", "w"}, set(left.members()))
        left.subtract(StringSet(self.store, "drop", "w"))
        self.assertEqual({"y", "z"}, set(left.members()))

    def test_server_side_algebra(self) -> None:
        config = SetConfig(server_side_algebra=True)
        left = StringSet(self.store, "left", "x", "y", config=config)
        right = StringSet(self.store, "right", "y", "z", config=config)
        left.union(right)
        self.assertEqual({"x", "y", "z"}, set(left.members()))
        left.intersect(right)
        self.assertEqual({"y", "z"}, set(left.members()))
        left.subtract(right)
        self.assertEqual([], left.members())

    def test_deduplicate_removes_key(self) -> None:
        result = deduplicate(self.store, "dedup", ["a", "A", " a ", "b"])
        self.assertEqual({"a", "b"}, set(result))
        self.assertFalse(self.store.exists("dedup"))

    def test_handles_in_threads_share_one_connection(self) -> None:
        handles = [StringSet(self.store, f"worker-{index}") for index in range(4)]

        def fill(handle: StringSet) -> None:
            for index in range(50):
                handle.insert(f"Item-{index}")

        threads = [threading.Thread(target=fill, args=(handle,)) for handle in handles]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(30.0)
        for handle in handles:
            self.assertEqual(50, handle.size())
            handle.close()
            handle.close()
            self.assertFalse(self.store.exists(handle.key))


if __name__ == "__main__":
    unittest.main()
