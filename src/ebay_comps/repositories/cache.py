"""Short-lived response cache keyed by query.

``MemoryCache`` is per-process; ``RedisCache`` shares entries between workers.
Both expire entries after ``ttl_secs``.
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Protocol

import redis

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECS = 60 * 60


@dataclass
class CacheConfig:
    ttl_secs: int = field(default_factory=lambda: int(os.environ.get("COMPS_CACHE_TTL_SECS", str(DEFAULT_TTL_SECS))))
    redis_url: Optional[str] = field(default_factory=lambda: os.environ.get("REDIS_URL"))
    key_prefix: str = "comps:"


@dataclass
class CacheEntry:
    query: str
    response: Dict[str, Any]
    timestamp: float


class QueryCache(Protocol):
    def get(self, key: str) -> Optional[CacheEntry]:
        ...

    def set(self, key: str, entry: CacheEntry) -> None:
        ...


class MemoryCache:
    def __init__(self, ttl_secs: int = DEFAULT_TTL_SECS, clock: Callable[[], float] = time.time) -> None:
        self.ttl_secs = ttl_secs
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[CacheEntry]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if self._clock() - entry.timestamp >= self.ttl_secs:
                del self._entries[key]
                return None
            return entry

    def set(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry


class RedisCache:
    def __init__(self, client: "redis.Redis", ttl_secs: int = DEFAULT_TTL_SECS, key_prefix: str = "comps:") -> None:
        self._redis = client
        self.ttl_secs = ttl_secs
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    def get(self, key: str) -> Optional[CacheEntry]:
        val = self._redis.get(self._key(key))
        if val is None:
            return None
        if isinstance(val, (bytes, bytearray)):
            val = val.decode("utf-8")
        try:
            data = json.loads(val)
            return CacheEntry(query=data["query"], response=data["response"], timestamp=float(data["timestamp"]))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable cache entry for %r: %s", key, e)
            return None

    def set(self, key: str, entry: CacheEntry) -> None:
        blob = json.dumps({"query": entry.query, "response": entry.response, "timestamp": entry.timestamp})
        self._redis.setex(self._key(key), self.ttl_secs, blob)


def make_cache(config: CacheConfig | None = None) -> QueryCache:
    """Redis-backed when ``REDIS_URL`` is set, otherwise in-process."""
    cfg = config or CacheConfig()
    if cfg.redis_url:
        return RedisCache(redis.Redis.from_url(cfg.redis_url), ttl_secs=cfg.ttl_secs, key_prefix=cfg.key_prefix)
    return MemoryCache(ttl_secs=cfg.ttl_secs)
