import pytest
from redis import exceptions as redis_exceptions

from projectboard.core import cache as cache_module
from projectboard.core.cache import InMemoryCache, RedisCache


class FakeRedis:
    def __init__(self, down=False, error=redis_exceptions.ConnectionError):
        self.data = {}
        self.down = down
        self.error = error
        self.expiries = {}

    def _check(self):
        if self.down:
            raise self.error("unavailable")

    def get(self, key):
        self._check()
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self._check()
        self.data[key] = value.encode("utf-8")
        self.expiries[key] = ex

    def delete(self, *keys):
        self._check()
        for k in keys:
            self.data.pop(k, None)

    def scan_iter(self, match=None):
        self._check()
        prefix = match.rstrip("*") if match else ""
        return [k for k in list(self.data) if k.startswith(prefix)]


def test_fetch_computes_once():
    cache = InMemoryCache()
    calls = []

    def compute():
        calls.append(1)
        return {"value": len(calls)}

    assert cache.fetch("k", compute) == {"value": 1}
    assert cache.fetch("k", compute) == {"value": 1}
    assert len(calls) == 1


def test_fetch_stores_falsy_values():
    cache = InMemoryCache()
    cache.fetch("k", lambda: None)
    assert cache.fetch("k", lambda: "recomputed") is None


def test_in_memory_ttl_expires(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
    cache = InMemoryCache()
    cache.set("k", "v", ttl=10)
    assert cache.get("k") == "v"
    now[0] += 11
    assert cache.get("k") is None
    assert "k" not in cache.items


def test_in_memory_delete_and_clear():
    cache = InMemoryCache()
    cache.set("a", 1)
    cache.set("b", 2)
    cache.delete("a")
    assert cache.get("a") is None
    cache.clear()
    assert cache.items == {}


def test_redis_cache_round_trips_json_under_namespace():
    client = FakeRedis()
    cache = RedisCache(url="redis://unused", namespace="pb", default_ttl=60, client=client)
    cache.set("projects/1", {"name": "Demo"})
    assert "pb:projects/1" in client.data
    assert client.expiries["pb:projects/1"] == 60
    assert cache.get("projects/1") == {"name": "Demo"}


def test_redis_fetch_is_read_through():
    cache = RedisCache(url="redis://unused", client=FakeRedis())
    assert cache.fetch("k", lambda: [1, 2]) == [1, 2]
    assert cache.fetch("k", lambda: pytest.fail("should be cached")) == [1, 2]


def test_redis_clear_only_touches_namespace():
    client = FakeRedis()
    client.data["other:key"] = b"1"
    cache = RedisCache(url="redis://unused", namespace="pb", client=client)
    cache.set("a", 1)
    cache.clear()
    assert list(client.data) == ["other:key"]


def test_redis_unavailable_computes_every_time():
    cache = RedisCache(url="redis://unused", client=FakeRedis(down=True))
    calls = []
    assert cache.fetch("k", lambda: calls.append(1) or "v") == "v"
    assert cache.fetch("k", lambda: calls.append(1) or "v") == "v"
    assert len(calls) == 2


@pytest.mark.parametrize("error", [redis_exceptions.ConnectionError, redis_exceptions.TimeoutError])
def test_redis_failures_degrade_to_compute(error):
    cache = RedisCache(url="redis://unused", client=FakeRedis(down=True, error=error))
    assert cache.fetch("k", lambda: "v") == "v"
    assert cache.get("k", "fallback") == "fallback"
    cache.delete("k")
    cache.clear()


def test_in_memory_expired_entry_already_evicted(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(cache_module.time, "monotonic", lambda: now[0])
    cache = InMemoryCache()
    cache.set("k", "v", ttl=10)
    now[0] += 11

    # another thread evicted the entry between the read and the eviction
    class Racing(dict):
        def get(self, key, default=None):
            entry = super().get(key, default)
            super().pop(key, None)
            return entry

    cache.items = Racing(cache.items)
    assert cache.get("k") is None
    assert cache.misses == 1


def test_get_cache_uses_settings(monkeypatch):
    monkeypatch.setattr(cache_module, "_cache", None)
    monkeypatch.setattr(cache_module.settings, "CACHE_BACKEND", "memory")
    assert isinstance(cache_module.get_cache(), InMemoryCache)
    assert cache_module.get_cache() is cache_module.get_cache()
