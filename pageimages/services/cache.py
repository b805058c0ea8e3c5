# pageimages/services/cache.py
# Responsibility: Compute-once-per-key caches with a TTL, safe against concurrent recomputation.

import json
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional, Tuple

import redis
from redis.exceptions import LockError

from pageimages.config.settings import settings
from pageimages.errors import ConfigurationError


class ComputeCache(ABC):
    """
    get_or_compute() returns the cached value for a key, or runs compute() exactly once
    while every other caller for the same key waits for that result.
    """

    @abstractmethod
    def get_or_compute(self, key: str, ttl_seconds: int, compute: Callable[[], Any]) -> Any:
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        pass


class InProcessComputeCache(ComputeCache):
    """
    Single-process cache guarded by one lock per key.
    Expiry uses a monotonic clock, injectable for tests.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._values: Dict[str, Tuple[float, Any]] = {}
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def get_or_compute(self, key: str, ttl_seconds: int, compute: Callable[[], Any]) -> Any:
        hit, value = self._lookup(key)
        if hit:
            return value

        with self._lock_for(key):
            # Another thread may have filled the slot while we waited
            hit, value = self._lookup(key)
            if hit:
                return value

            value = compute()
            self._values[key] = (self.clock() + ttl_seconds, value)
            return value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def _lookup(self, key: str) -> Tuple[bool, Any]:
        entry = self._values.get(key)
        if entry is None:
            return False, None

        expires_at, value = entry
        if self.clock() >= expires_at:
            return False, None
        return True, value

    def _lock_for(self, key: str) -> threading.Lock:
        with self._registry_lock:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]


class RedisComputeCache(ComputeCache):
    """
    Cache shared by every process pointing at the same Redis.

    Values are stored as JSON with SETEX. Recomputation runs under a Redis lock on
    "<key>:lock"; whoever gets the lock re-reads the key first, so callers that queued
    behind the lock pick up the fresh value instead of recomputing it.
    """

    def __init__(self, lock_timeout: Optional[int] = None):
        self.client = redis.from_url(settings.REDIS.URL, decode_responses=True)
        self.lock_timeout = lock_timeout or settings.REDIS.LOCK_TIMEOUT_SECONDS

    def get_or_compute(self, key: str, ttl_seconds: int, compute: Callable[[], Any]) -> Any:
        hit, value = self._read(key)
        if hit:
            return value

        lock = self.client.lock(
            f"{key}:lock",
            timeout=self.lock_timeout,
            blocking_timeout=self.lock_timeout,
        )
        try:
            acquired = lock.acquire()
        except redis.RedisError as e:
            print(f"[Cache] Lock error on {key}, computing without cache: {e}")
            return compute()

        if not acquired:
            print(f"[Cache] Timed out waiting for {key} recomputation, computing locally")
            return compute()

        try:
            hit, value = self._read(key)
            if hit:
                return value

            value = compute()
            self._write(key, ttl_seconds, value)
            return value
        finally:
            try:
                lock.release()
            except LockError:
                # Lock expired while computing; another worker may already own it
                print(f"[Cache] Lock on {key} expired before release")

    def delete(self, key: str) -> None:
        self.client.delete(key)

    def _read(self, key: str) -> Tuple[bool, Any]:
        try:
            cached = self.client.get(key)
            if cached is not None:
                return True, json.loads(cached)
        except (redis.RedisError, json.JSONDecodeError) as e:
            print(f"[Cache] Fetch error on {key}: {e}")
        return False, None

    def _write(self, key: str, ttl_seconds: int, value: Any) -> None:
        try:
            self.client.setex(key, ttl_seconds, json.dumps(value))
        except (redis.RedisError, TypeError) as e:
            print(f"[Cache] Write error on {key}: {e}")


def create_cache(backend: Optional[str] = None) -> ComputeCache:
    """Builds the cache selected by PAGEIMAGES.CACHE_BACKEND."""
    backend = backend or settings.PAGEIMAGES.CACHE_BACKEND
    if backend == "memory":
        return InProcessComputeCache()
    if backend == "redis":
        return RedisComputeCache()
    raise ConfigurationError(f"Unknown cache backend '{backend}'")
