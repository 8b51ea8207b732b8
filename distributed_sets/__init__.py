"""
distributed_sets
================

Mutex-guarded string sets backed by an external key-value store.

A :class:`distributed_sets.primitives.StringSet` is a local handle for one
remote set. Many processes, or many threads in one process, can treat the
remote set like a local collection:

* membership tests, insertion, removal
* deduplication with case-insensitive canonical form (members are stored
  lower-cased)
* set algebra: ``union``, ``subtract``, ``intersect``

Each handle serializes its own operations through a process-local lock. The
store guarantees atomicity per command only, so composite operations are
best-effort merges unless server-side algebra is enabled. No cross-process
mutual exclusion is provided.

Store switching can be done with one parameter:

    from distributed_sets import create_store

    store = create_store("memory")
    store = create_store("redis", redis_url="redis://127.0.0.1:6379/0")

Typical usage::

    from distributed_sets import StringSet, create_store, deduplicate

    store = create_store("redis", redis_url="redis://127.0.0.1:6379/0")

    tags = StringSet(store, "article:42:tags", "Python", "redis")
    tags.insert("PYTHON")
    assert tags.has("python")
    assert len(tags) == 2

    unique = deduplicate(store, "tmp:dedup", ["a", "A", "b"])
"""

from .backends import StoreBackend, available_backends, create_store
from .config import RedisStoreConfig, SetConfig
from .exceptions import (
    BackendConfigurationError,
    DistributedSetsError,
    SetParseError,
    StoreOperationError,
)
from .flags import StringSetAction, TextValue
from .primitives import StringSet, canonical, deduplicate
from .redis_store import RedisSetStore
from .results import OperationResult
from .store import MemorySetStore
from .store_protocol import SetAlgebraStore, SetStore

__all__ = [
    "BackendConfigurationError",
    "DistributedSetsError",
    "MemorySetStore",
    "OperationResult",
    "RedisSetStore",
    "RedisStoreConfig",
    "SetAlgebraStore",
    "SetConfig",
    "SetParseError",
    "SetStore",
    "StoreBackend",
    "StoreOperationError",
    "StringSet",
    "StringSetAction",
    "TextValue",
    "available_backends",
    "canonical",
    "create_store",
    "deduplicate",
]
