"""
Configuration models for distributed string sets.

This module centralizes the tunable settings used by set handles and the
Redis store adapter:

* textual codec separator
* server-side set algebra opt-in
* Redis connection URL, key namespace, and per-command socket timeout
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SetConfig:
    """
    Behavior settings for :class:`distributed_sets.primitives.StringSet`.

    Parameters
    ----------
    separator:
        Token separator used by ``render`` and ``parse``.
    server_side_algebra:
        When true, ``union``/``subtract``/``intersect`` run as one atomic
        store command if both handles share a store that supports it.
        Otherwise the client-side composition of single-member primitives is
        used.
    """

    separator: str = ","
    server_side_algebra: bool = False

    def __post_init__(self) -> None:
        """Validate codec settings at construction time."""
        if not self.separator:
            raise ValueError("SetConfig.separator must be a non-empty string.")


@dataclass(slots=True)
class RedisStoreConfig:
    """
    Configuration for :class:`distributed_sets.redis_store.RedisSetStore`.

    Parameters
    ----------
    redis_url:
        Redis connection URL used when a client is not directly supplied.
    namespace:
        Optional prefix for every Redis key. Empty means keys are used as-is.
    socket_timeout_seconds:
        Per-command deadline applied to clients built from ``redis_url``.
    """

    redis_url: str = "redis://127.0.0.1:6379/0"
    namespace: str = ""
    socket_timeout_seconds: float = 2.0

    def __post_init__(self) -> None:
        """Validate connection settings that affect blocking behavior."""
        if not self.redis_url:
            raise ValueError("RedisStoreConfig.redis_url must be a non-empty string.")
        if self.socket_timeout_seconds <= 0:
            raise ValueError("RedisStoreConfig.socket_timeout_seconds must be > 0.")

    def qualify(self, key: str) -> str:
        """Return the Redis key for a logical set key."""
        if not self.namespace:
            return key
        return f"{self.namespace}:{key}"
