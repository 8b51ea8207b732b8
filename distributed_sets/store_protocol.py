"""
Store protocol used by :class:`distributed_sets.primitives.StringSet`.

Set handles depend on this narrow command surface rather than on a specific
client, so the in-memory store and the Redis adapter are interchangeable.
Each method maps to exactly one atomic store command.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


class SetStore(Protocol):
    """
    Behavioral contract for set state backends.

    Implementations are expected to be safe for concurrent access, because
    many handles over different keys may share one store object. Stores do
    not normalize values; handles lower-case members before calling in.
    """

    def add_member(self, key: str, value: str) -> None:
        """Add one member to the set at ``key``, creating the set if needed."""

    def remove_member(self, key: str, value: str) -> None:
        """Remove one member; removing an absent member is a no-op."""

    def is_member(self, key: str, value: str) -> bool:
        """Return true when the set at ``key`` contains ``value``."""

    def all_members(self, key: str) -> list[str]:
        """Return a snapshot of all members at call time."""

    def cardinality(self, key: str) -> int:
        """Return the member count at call time."""

    def delete_key(self, key: str) -> None:
        """Delete the whole set at ``key``."""


@runtime_checkable
class SetAlgebraStore(SetStore, Protocol):
    """
    Optional extension for stores that run set algebra server-side.

    Each method is one atomic command that rewrites ``dest`` in place.
    """

    def union_into(self, dest: str, source: str) -> None:
        """Store ``dest | source`` into ``dest``."""

    def difference_into(self, dest: str, source: str) -> None:
        """Store ``dest - source`` into ``dest``."""

    def intersect_into(self, dest: str, source: str) -> None:
        """Store ``dest & source`` into ``dest``."""
