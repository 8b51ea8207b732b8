"""
User-facing distributed string set handle.

:class:`StringSet` exposes a familiar set-style API over a set stored in an
external key-value store. Each public method is serialized through a
process-local lock and translated into one or more atomic store commands.

Consistency contract
--------------------
* Single-member operations (``has``, ``insert``, ``remove``, ``members``,
  ``size``, ``close``) are one atomic store command each.
* Composite operations (``insert_many``, ``union``, ``subtract``,
  ``intersect``, ``parse``) hold this handle's lock for their whole
  duration, but issue one store command per member. Other handles, in this
  process or elsewhere, may interleave writes to either key mid-sequence.
  The result is a best-effort merge, not a snapshot-consistent one.
* The ``other`` handle passed to set algebra methods is never locked.
* With ``SetConfig.server_side_algebra`` enabled and both handles sharing a
  store that supports it, set algebra runs as one atomic store command.

Failure policy
--------------
Plain methods fail closed: a store error is logged and counted, reads
report absent/empty, writes are dropped. The ``try_*`` variants return an
:class:`distributed_sets.results.OperationResult` instead, so callers that
care can tell success from failure.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from .config import SetConfig
from .exceptions import SetParseError
from .flags import TextValue
from .results import OperationResult
from .store_protocol import SetAlgebraStore, SetStore

_LOGGER = logging.getLogger(__name__)


def canonical(element: str) -> str:
    """Return the canonical, case-insensitive form of a member."""
    return element.lower()


class StringSet(TextValue):
    """
    Mutex-guarded handle for one remote set of lower-cased strings.

    Parameters
    ----------
    store:
        Shared store connection. Not owned: its lifetime is managed by the
        caller and it may back many handles over different keys.
    key:
        Name of the remote set. Not validated.
    initial:
        Members inserted, as one locked batch, before the constructor
        returns.
    config:
        Optional handle behavior settings.
    """

    def __init__(
        self,
        store: SetStore,
        key: str,
        *initial: str,
        config: SetConfig | None = None,
    ) -> None:
        self._store = store
        self._key = key
        self.config = config or SetConfig()
        self._lock = threading.Lock()
        self._stats_lock = threading.Lock()
        self._stats: dict[str, int] = {
            "operations": 0,
            "failures": 0,
            "composite_operations": 0,
            "server_side_operations": 0,
        }
        if initial:
            self.insert_many(*initial)

    @property
    def key(self) -> str:
        """Return the remote set key."""
        return self._key

    @property
    def store(self) -> SetStore:
        """Return the shared store this handle issues commands to."""
        return self._store

    # ------------------------------------------------------------------ #
    # Single-command operations
    # ------------------------------------------------------------------ #

    def has(self, element: str) -> bool:
        """Return true when the set contains ``element``, ignoring case."""
        return self.try_has(element).value

    def try_has(self, element: str) -> OperationResult:
        """Like :meth:`has`, but return an :class:`OperationResult` carrying any store error."""
        with self._lock:
            return self._has(element)

    def insert(self, element: str) -> None:
        """
        Add ``element`` to the set.

        Inserting a member that is already present changes nothing. Store
        errors are logged and swallowed; use :meth:`try_insert` to observe
        them.
        """
        self.try_insert(element)

    def try_insert(self, element: str) -> OperationResult:
        """Like :meth:`insert`, but return an :class:`OperationResult` carrying any store error."""
        with self._lock:
            return self._insert(element)

    def remove(self, element: str) -> None:
        """Remove ``element`` from the set; absent members are a no-op."""
        self.try_remove(element)

    def try_remove(self, element: str) -> OperationResult:
        """Like :meth:`remove`, but return an :class:`OperationResult` carrying any store error."""
        with self._lock:
            return self._remove(element)

    def members(self) -> list[str]:
        """
        Return all members, in whatever order the store reports them.

        Returns an empty list when the store cannot be read.
        """
        return self.try_members().value

    def try_members(self) -> OperationResult:
        """Like :meth:`members`, but return an :class:`OperationResult` carrying any store error."""
        with self._lock:
            return self._members()

    def size(self) -> int:
        """Return the member count, or ``0`` when the store cannot be read."""
        return self.try_size().value

    def try_size(self) -> OperationResult:
        """Like :meth:`size`, but return an :class:`OperationResult` carrying any store error."""
        with self._lock:
            return self._size()

    def close(self) -> None:
        """
        Delete the remote set. Irreversible.

        The handle stays usable afterwards; later calls operate on a freshly
        auto-created empty set. Closing twice is harmless.
        """
        self.try_close()

    def try_close(self) -> OperationResult:
        """Like :meth:`close`, but return an :class:`OperationResult` carrying any store error."""
        with self._lock:
            result = self._execute("close", lambda: self._store.delete_key(self._key))
        if result.ok:
            _LOGGER.debug("Deleted remote set key=%s", self._key)
        return result

    # ------------------------------------------------------------------ #
    # Composite operations
    # ------------------------------------------------------------------ #

    def insert_many(self, *elements: str) -> None:
        """
        Add every element while holding the lock for the whole batch.

        Each element is still its own store command; the batch is not atomic
        on the store side.
        """
        with self._lock:
            self._inc_stat("composite_operations")
            for element in elements:
                self._insert(element)

    def union(self, other: StringSet) -> None:
        """Add every member of ``other`` to this set. ``other`` is unchanged."""
        with self._lock:
            self._inc_stat("composite_operations")
            if self._run_server_side("union", other):
                return
            for item in other._members().value:
                self._insert(item)

    def subtract(self, other: StringSet) -> None:
        """Remove every member of ``other`` from this set."""
        with self._lock:
            self._inc_stat("composite_operations")
            if self._run_server_side("subtract", other):
                return
            for item in other._members().value:
                self._remove(item)

    def intersect(self, other: StringSet) -> None:
        """
        Keep only members also found in ``other``.

        Issues one membership query against ``other`` per member of this
        set. A failed query counts as absent, so the member is removed.
        """
        with self._lock:
            self._inc_stat("composite_operations")
            if self._run_server_side("intersect", other):
                return
            for item in self._members().value:
                if not other._has(item).value:
                    self._remove(item)

    # ------------------------------------------------------------------ #
    # Textual codec
    # ------------------------------------------------------------------ #

    def render(self) -> str:
        """Join the current members with the configured separator."""
        with self._lock:
            return self.config.separator.join(self._members().value)

    def parse(self, text: str) -> None:
        """
        Insert every separator-delimited token of ``text``.

        Tokens are stripped of surrounding whitespace. Empty and duplicate
        tokens are inserted as-is. Existing members are never cleared, so
        repeated calls accumulate.

        Raises
        ------
        SetParseError
            When ``text`` is empty.
        """
        if text == "":
            raise SetParseError("string parsing failed: empty input")
        with self._lock:
            self._inc_stat("composite_operations")
            for item in text.split(self.config.separator):
                self._insert(item.strip())

    # ------------------------------------------------------------------ #
    # Diagnostics
    # ------------------------------------------------------------------ #

    def stats(self) -> dict[str, Any]:
        """
        Return cumulative operation counters.

        ``failures`` counts store errors swallowed on the fail-closed path.
        """
        with self._stats_lock:
            payload: dict[str, Any] = dict(self._stats)
        payload["key"] = self._key
        return payload

    # ------------------------------------------------------------------ #
    # Unlocked helpers; callers must hold ``self._lock``
    # ------------------------------------------------------------------ #

    def _has(self, element: str) -> OperationResult:
        value = canonical(element)
        return self._execute(
            "has",
            lambda: bool(self._store.is_member(self._key, value)),
            default=False,
            element=element,
        )

    def _insert(self, element: str) -> OperationResult:
        value = canonical(element)
        return self._execute(
            "insert",
            lambda: self._store.add_member(self._key, value),
            element=element,
        )

    def _remove(self, element: str) -> OperationResult:
        value = canonical(element)
        return self._execute(
            "remove",
            lambda: self._store.remove_member(self._key, value),
            element=element,
        )

    def _members(self) -> OperationResult:
        return self._execute(
            "members",
            lambda: list(self._store.all_members(self._key)),
            default=[],
        )

    def _size(self) -> OperationResult:
        return self._execute(
            "size",
            lambda: int(self._store.cardinality(self._key)),
            default=0,
        )

    def _run_server_side(self, operation: str, other: StringSet) -> bool:
        """
        Run set algebra as one store command when configured and possible.

        Returns ``False`` when the caller must fall back to the client-side
        composition.
        """
        if not self.config.server_side_algebra:
            return False
        store = self._store
        if other._store is not store or not isinstance(store, SetAlgebraStore):
            return False
        commands: dict[str, Callable[[str, str], None]] = {
            "union": store.union_into,
            "subtract": store.difference_into,
            "intersect": store.intersect_into,
        }
        command = commands[operation]
        self._inc_stat("server_side_operations")
        _LOGGER.debug(
            "Running server-side %s key=%s other=%s", operation, self._key, other._key
        )
        self._execute(operation, lambda: command(self._key, other._key))
        return True

    def _execute(
        self,
        operation: str,
        call: Callable[[], Any],
        *,
        default: Any = None,
        element: str | None = None,
    ) -> OperationResult:
        self._inc_stat("operations")
        try:
            value = call()
        except Exception as exc:  # noqa: BLE001 - store failures are reported, not raised
            self._inc_stat("failures")
            _LOGGER.warning(
                "Set %s failed key=%s element=%r: %s",
                operation,
                self._key,
                element,
                exc,
            )
            return OperationResult(operation, self._key, default, exc)
        return OperationResult(operation, self._key, value)

    def _inc_stat(self, key: str, delta: int = 1) -> None:
        with self._stats_lock:
            self._stats[key] = self._stats.get(key, 0) + delta

    # ------------------------------------------------------------------ #
    # Python protocols
    # ------------------------------------------------------------------ #

    def __contains__(self, element: object) -> bool:
        if not isinstance(element, str):
            return False
        return self.has(element)

    def __iter__(self) -> Iterator[str]:
        return iter(self.members())

    def __len__(self) -> int:
        return self.size()

    def __repr__(self) -> str:
        return f"StringSet(key={self._key!r})"

    def __enter__(self) -> StringSet:
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> bool:
        self.close()
        return False


def deduplicate(
    store: SetStore,
    key: str,
    values: Iterable[str],
    *,
    config: SetConfig | None = None,
) -> list[str]:
    """
    Return the distinct, lower-cased, whitespace-stripped ``values``.

    The values pass through a temporary remote set at ``key``, which is
    deleted before returning. Anything already stored at ``key`` is merged
    into the result and then deleted too.
    """
    with StringSet(store, key, *(value.strip() for value in values), config=config) as handle:
        return handle.members()
