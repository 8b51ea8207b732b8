"""
Thread-safe in-memory set store.

The store keeps every named set in one dictionary guarded by a single lock,
so each method behaves like one atomic store command. It implements both
:class:`SetStore` and the optional server-side algebra extension.
"""

from __future__ import annotations

from threading import RLock


class MemorySetStore:
    """
    In-process storage backing :class:`distributed_sets.primitives.StringSet`.

    Notes
    -----
    * Sets are created on first insert and dropped when they become empty,
      mirroring Redis key semantics.
    * Read snapshots are returned as fresh lists to protect internal state
      from accidental mutation by caller code.
    """

    def __init__(self) -> None:
        """Create empty set containers and initialize lock state."""
        self._sets: dict[str, set[str]] = {}
        self._lock = RLock()

    def add_member(self, key: str, value: str) -> None:
        with self._lock:
            self._sets.setdefault(key, set()).add(value)

    def remove_member(self, key: str, value: str) -> None:
        with self._lock:
            target = self._sets.get(key)
            if target is None:
                return
            target.discard(value)
            if not target:
                del self._sets[key]

    def is_member(self, key: str, value: str) -> bool:
        with self._lock:
            return value in self._sets.get(key, ())

    def all_members(self, key: str) -> list[str]:
        """Return a list copy of the named set."""
        with self._lock:
            return list(self._sets.get(key, ()))

    def cardinality(self, key: str) -> int:
        with self._lock:
            return len(self._sets.get(key, ()))

    def delete_key(self, key: str) -> None:
        with self._lock:
            self._sets.pop(key, None)

    def exists(self, key: str) -> bool:
        """Return true when a non-empty set is stored at ``key``."""
        with self._lock:
            return key in self._sets

    def keys(self) -> list[str]:
        """Return the names of all stored sets."""
        with self._lock:
            return list(self._sets)

    # ------------------------------------------------------------------ #
    # Server-side algebra
    # ------------------------------------------------------------------ #

    def union_into(self, dest: str, source: str) -> None:
        with self._lock:
            self._replace(dest, self._sets.get(dest, set()) | self._sets.get(source, set()))

    def difference_into(self, dest: str, source: str) -> None:
        with self._lock:
            self._replace(dest, self._sets.get(dest, set()) - self._sets.get(source, set()))

    def intersect_into(self, dest: str, source: str) -> None:
        with self._lock:
            self._replace(dest, self._sets.get(dest, set()) & self._sets.get(source, set()))

    def _replace(self, key: str, values: set[str]) -> None:
        if values:
            self._sets[key] = values
        else:
            self._sets.pop(key, None)
