import time

from amazing_form.cache import CacheService


def test_store_then_get():
    cache = CacheService()
    cache.store("forms", [1, 2])
    assert cache.get("forms") == [1, 2]


def test_missing_key_returns_none():
    assert CacheService().get("absent") is None


def test_store_overwrites():
    cache = CacheService()
    cache.store("k", "a")
    cache.store("k", "b")
    assert cache.get("k") == "b"


def test_entries_expire():
    cache = CacheService(maxsize=8, ttl=0.01)
    cache.store("k", "v")
    time.sleep(0.05)
    assert cache.get("k") is None


def test_maxsize_evicts_entries():
    cache = CacheService(maxsize=1, ttl=60)
    cache.store("a", 1)
    cache.store("b", 2)
    assert cache.get("a") is None
    assert cache.get("b") == 2