"""
Cache storage for scraped results.

Two implementations of the same small interface:

- RedisStore: the production store (SET ... EX, DEL, KEYS)
- MemoryStore: an in-process dict, used by tests and by `proftafla --memory`

Values are opaque strings (the service stores JSON). Every entry carries
a TTL; once it has elapsed the entry behaves exactly like a deleted one.
"""

from __future__ import annotations

import fnmatch
import logging
import threading
import time
from typing import Callable, Dict, Iterable, List, Optional, Tuple

import redis

from proftafla.errors import CacheUnavailable

logger = logging.getLogger(__name__)


def _check_ttl(ttl_seconds: int) -> None:
    if int(ttl_seconds) != ttl_seconds or ttl_seconds <= 0:
        raise ValueError(f"ttl_seconds must be a positive integer, got {ttl_seconds!r}")


class CacheStore:
    """
    Key/value store with per-entry expiry.
    """

    def get(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        raise NotImplementedError

    def delete(self, keys: Iterable[str]) -> int:
        """Delete keys, return how many actually existed. Missing keys count zero."""
        raise NotImplementedError

    def keys(self, pattern: str = "*") -> List[str]:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self) -> "CacheStore":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class RedisStore(CacheStore):
    """
    Cache store backed by a Redis server.

    Errors from redis-py (connection, timeout, error replies) are raised as
    CacheUnavailable so an outage is never mistaken for an empty cache.
    """

    def __init__(self, client: redis.Redis):
        self.client = client

    @classmethod
    def from_url(cls, url: str) -> "RedisStore":
        client = redis.Redis.from_url(url, decode_responses=True)
        logger.info("Redis store configured for %s", url)
        return cls(client)

    def get(self, key: str) -> Optional[str]:
        try:
            return self.client.get(key)
        except redis.exceptions.RedisError as e:
            raise CacheUnavailable(f"Could not read {key!r} from Redis: {e}") from e

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        _check_ttl(ttl_seconds)
        try:
            self.client.set(key, value, ex=int(ttl_seconds))
        except redis.exceptions.RedisError as e:
            raise CacheUnavailable(f"Could not write {key!r} to Redis: {e}") from e

    def delete(self, keys: Iterable[str]) -> int:
        key_list = list(keys)
        if not key_list:
            return 0
        try:
            return int(self.client.delete(*key_list))
        except redis.exceptions.RedisError as e:
            raise CacheUnavailable(f"Could not delete keys from Redis: {e}") from e

    def keys(self, pattern: str = "*") -> List[str]:
        try:
            return list(self.client.keys(pattern))
        except redis.exceptions.RedisError as e:
            raise CacheUnavailable(f"Could not list keys in Redis: {e}") from e

    def close(self) -> None:
        self.client.close()


class MemoryStore(CacheStore):
    """
    Dict-based store. Expired entries are dropped lazily on access.

    `clock` returns seconds and can be replaced in tests to move time forward.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = threading.Lock()

    def _live(self, key: str, now: float) -> Optional[str]:
        # caller holds the lock
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if now >= expires_at:
            del self._entries[key]
            return None
        return value

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            return self._live(key, self._clock())

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        _check_ttl(ttl_seconds)
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def delete(self, keys: Iterable[str]) -> int:
        deleted = 0
        with self._lock:
            now = self._clock()
            for key in set(keys):
                if self._live(key, now) is not None:
                    del self._entries[key]
                    deleted += 1
        return deleted

    def keys(self, pattern: str = "*") -> List[str]:
        with self._lock:
            now = self._clock()
            return [k for k in list(self._entries) if self._live(k, now) is not None and fnmatch.fnmatchcase(k, pattern)]
