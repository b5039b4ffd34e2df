from __future__ import annotations

import json
import math
import threading
import time
from dataclasses import asdict, dataclass
from typing import Callable, Protocol

from redis import Redis

from lusefeed.config.settings import Settings
from lusefeed.schemas.rows import Cell


Table = list[list[Cell]]


@dataclass(frozen=True)
class CacheEntry:
    timestamp: float
    rows: Table
    source: str

    def age(self, now: float) -> float:
        return now - self.timestamp


class ResultCache(Protocol):
    ttl_seconds: float
    clock: Callable[[], float]

    def get(self) -> CacheEntry | None: ...

    def peek(self) -> CacheEntry | None: ...

    def set(self, rows: Table, source: str) -> CacheEntry: ...


class MemoryResultCache:
    """Single in-process slot holding the last resolved table."""

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.time) -> None:
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._entry: CacheEntry | None = None
        self._lock = threading.Lock()

    def peek(self) -> CacheEntry | None:
        with self._lock:
            return self._entry

    def get(self) -> CacheEntry | None:
        with self._lock:
            entry = self._entry
        if entry is None or entry.age(self.clock()) >= self.ttl_seconds:
            return None
        return entry

    def set(self, rows: Table, source: str) -> CacheEntry:
        entry = CacheEntry(timestamp=self.clock(), rows=rows, source=source)
        with self._lock:
            self._entry = entry
        return entry


class RedisResultCache:
    """The same single slot kept under one Redis key, shared by worker processes.

    Redis faults read as a miss and writes are dropped, so the chain keeps
    serving from upstream or the fallback.
    """

    def __init__(
        self,
        redis_url: str,
        key: str,
        ttl_seconds: float,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.redis_url = redis_url
        self.key = key
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _get_client(self) -> Redis:
        return Redis.from_url(self.redis_url)

    def peek(self) -> CacheEntry | None:
        try:
            client = self._get_client()
            raw = client.get(self.key)
        except Exception:
            return None

        if not raw:
            return None

        try:
            payload = json.loads(raw)
            return CacheEntry(
                timestamp=float(payload["timestamp"]),
                rows=payload["rows"],
                source=payload["source"],
            )
        except (json.JSONDecodeError, KeyError, TypeError, ValueError):
            return None

    def get(self) -> CacheEntry | None:
        entry = self.peek()
        if entry is None or entry.age(self.clock()) >= self.ttl_seconds:
            return None
        return entry

    def set(self, rows: Table, source: str) -> CacheEntry:
        entry = CacheEntry(timestamp=self.clock(), rows=rows, source=source)
        try:
            client = self._get_client()
            client.setex(self.key, math.ceil(self.ttl_seconds), json.dumps(asdict(entry)))
        except Exception:
            return entry
        return entry


def build_cache(settings: Settings) -> ResultCache:
    if settings.cache_backend == "redis":
        return RedisResultCache(settings.redis_url, settings.cache_key, settings.cache_ttl_seconds)
    return MemoryResultCache(settings.cache_ttl_seconds)
