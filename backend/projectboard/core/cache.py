"""
Key-value cache for rendered API representations.

``fetch`` is read-through: a hit returns the stored value, a miss computes the
value, stores it and returns it. Population is idempotent so concurrent misses
simply compute twice; no locking is done.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Protocol

import redis
from redis import exceptions as redis_exceptions

from projectboard.core.config import settings
from projectboard.core.logging import logger

_MISSING = object()
# TimeoutError is not a ConnectionError subclass
_UNAVAILABLE = (redis_exceptions.ConnectionError, redis_exceptions.TimeoutError)


class CacheStore(Protocol):
    def get(self, key: str, default: Any = None) -> Any:
        ...

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        ...

    def delete(self, key: str) -> None:
        ...

    def clear(self) -> None:
        ...

    def fetch(self, key: str, compute: Callable[[], Any], ttl: int | None = None) -> Any:
        ...


class _FetchMixin:
    def fetch(self, key: str, compute: Callable[[], Any], ttl: int | None = None) -> Any:
        value = self.get(key, _MISSING)
        if value is not _MISSING:
            return value
        value = compute()
        self.set(key, value, ttl)
        return value


@dataclass
class InMemoryCache(_FetchMixin):
    """Process-local cache for tests and single-process dev servers."""

    default_ttl: int | None = None
    items: dict[str, tuple[Any, float | None]] = field(default_factory=dict)
    hits: int = 0
    misses: int = 0

    def get(self, key: str, default: Any = None) -> Any:
        entry = self.items.get(key)
        if entry is None:
            self.misses += 1
            return default
        value, expires_at = entry
        if expires_at is not None and expires_at <= time.monotonic():
            self.items.pop(key, None)
            self.misses += 1
            return default
        self.hits += 1
        return value

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        ttl = ttl if ttl is not None else self.default_ttl
        expires_at = time.monotonic() + ttl if ttl else None
        self.items[key] = (value, expires_at)

    def delete(self, key: str) -> None:
        self.items.pop(key, None)

    def clear(self) -> None:
        self.items.clear()


@dataclass
class RedisCache(_FetchMixin):
    """Redis-backed cache storing JSON-encoded values under a namespace prefix."""

    url: str
    namespace: str = "projectboard"
    default_ttl: int | None = None
    client: Any = None

    def __post_init__(self):
        if self.client is None:
            self.client = redis.Redis.from_url(self.url)

    def _key(self, key: str) -> str:
        return f"{self.namespace}:{key}"

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.client.get(self._key(key))
        except _UNAVAILABLE as e:
            logger.warning("cache_unavailable", op="get", key=key, error=str(e))
            return default
        if raw is None:
            return default
        return json.loads(raw)

    def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        ttl = ttl if ttl is not None else self.default_ttl
        try:
            self.client.set(self._key(key), json.dumps(value), ex=ttl or None)
        except _UNAVAILABLE as e:
            logger.warning("cache_unavailable", op="set", key=key, error=str(e))

    def delete(self, key: str) -> None:
        try:
            self.client.delete(self._key(key))
        except _UNAVAILABLE as e:
            logger.warning("cache_unavailable", op="delete", key=key, error=str(e))

    def clear(self) -> None:
        try:
            keys = list(self.client.scan_iter(match=f"{self.namespace}:*"))
            if keys:
                self.client.delete(*keys)
        except _UNAVAILABLE as e:
            logger.warning("cache_unavailable", op="clear", error=str(e))


_cache: CacheStore | None = None


def get_cache() -> CacheStore:
    """Return the process-wide cache, built from settings on first use."""
    global _cache
    if _cache is not None:
        return _cache
    if settings.CACHE_BACKEND == "redis":
        _cache = RedisCache(url=settings.REDIS_URL, namespace=settings.CACHE_NAMESPACE,
                            default_ttl=settings.CACHE_TTL_SECONDS)
    else:
        _cache = InMemoryCache(default_ttl=settings.CACHE_TTL_SECONDS)
    logger.info("cache_configured", backend=settings.CACHE_BACKEND)
    return _cache


def set_cache(cache: CacheStore | None) -> None:
    global _cache
    _cache = cache
