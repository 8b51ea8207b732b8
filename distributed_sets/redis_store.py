"""
Redis-backed set store implementation.

Every protocol method is one Redis command, so the per-command atomicity
Redis guarantees is exactly the atomicity the store contract promises:

* ``add_member`` -> ``SADD``
* ``remove_member`` -> ``SREM``
* ``is_member`` -> ``SISMEMBER``
* ``all_members`` -> ``SMEMBERS``
* ``cardinality`` -> ``SCARD``
* ``delete_key`` -> ``DEL``
* ``union_into`` / ``difference_into`` / ``intersect_into`` ->
  ``SUNIONSTORE`` / ``SDIFFSTORE`` / ``SINTERSTORE``
"""

from __future__ import annotations

import logging

from redis import Redis

from .config import RedisStoreConfig

_LOGGER = logging.getLogger(__name__)


class RedisSetStore:
    """
    Redis implementation of :class:`distributed_sets.store_protocol.SetStore`.

    Parameters
    ----------
    config:
        Connection and namespace settings.
    redis_client:
        Optional preconfigured Redis client. When omitted, a client is built
        from ``config.redis_url`` with ``config.socket_timeout_seconds`` as
        its socket timeout. The client is shared, not owned: ``close`` on a
        set handle never closes the connection.

    Notes
    -----
    Redis clients are safe for concurrent use from many threads, so one
    store may back any number of handles. Retries, if wanted, belong in the
    client's own ``retry`` configuration.
    """

    def __init__(
        self,
        *,
        config: RedisStoreConfig | None = None,
        redis_client: Redis | None = None,
    ) -> None:
        self.config = config or RedisStoreConfig()
        if redis_client is None:
            _LOGGER.debug(
                "Creating Redis client url=%s socket_timeout=%s",
                self.config.redis_url,
                self.config.socket_timeout_seconds,
            )
            redis_client = Redis.from_url(
                self.config.redis_url,
                socket_timeout=self.config.socket_timeout_seconds,
                socket_connect_timeout=self.config.socket_timeout_seconds,
            )
        self._redis = redis_client

    @property
    def client(self) -> Redis:
        """Return the underlying Redis client."""
        return self._redis

    def _key(self, key: str) -> str:
        return self.config.qualify(key)

    def _decode_text(self, value: bytes | str) -> str:
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    # ------------------------------------------------------------------ #
    # Primitive commands
    # ------------------------------------------------------------------ #

    def add_member(self, key: str, value: str) -> None:
        self._redis.sadd(self._key(key), value)

    def remove_member(self, key: str, value: str) -> None:
        self._redis.srem(self._key(key), value)

    def is_member(self, key: str, value: str) -> bool:
        return bool(self._redis.sismember(self._key(key), value))

    def all_members(self, key: str) -> list[str]:
        raw = self._redis.smembers(self._key(key))
        return [self._decode_text(item) for item in raw]

    def cardinality(self, key: str) -> int:
        return int(self._redis.scard(self._key(key)))

    def delete_key(self, key: str) -> None:
        self._redis.delete(self._key(key))

    def exists(self, key: str) -> bool:
        """Return true when a set is stored at ``key``."""
        return bool(self._redis.exists(self._key(key)))

    # ------------------------------------------------------------------ #
    # Server-side algebra
    # ------------------------------------------------------------------ #

    def union_into(self, dest: str, source: str) -> None:
        target = self._key(dest)
        self._redis.sunionstore(target, [target, self._key(source)])

    def difference_into(self, dest: str, source: str) -> None:
        target = self._key(dest)
        self._redis.sdiffstore(target, [target, self._key(source)])

    def intersect_into(self, dest: str, source: str) -> None:
        target = self._key(dest)
        self._redis.sinterstore(target, [target, self._key(source)])
