"""Testes do cache de tokens OAuth2."""

from __future__ import annotations

from app.services.token_cache import TokenCache


class _Clock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_put_and_get_within_ttl() -> None:
    clock = _Clock()
    cache = TokenCache(ttl_seconds=300, clock=clock)
    key = cache.make_key("https://api.test", "client", "secret")

    cache.put(key, "tok-1")
    clock.now += 299

    assert cache.get(key) == "tok-1"


def test_entry_expires_after_ttl() -> None:
    clock = _Clock()
    cache = TokenCache(ttl_seconds=300, clock=clock)
    cache.put("k", "tok-1")
    clock.now += 300

    assert cache.get("k") is None


def test_provider_expiry_shortens_ttl_with_safety_margin() -> None:
    clock = _Clock()
    cache = TokenCache(ttl_seconds=300, clock=clock)
    cache.put("k", "tok-1", expires_in=60)

    clock.now += 29
    assert cache.get("k") == "tok-1"
    clock.now += 1
    assert cache.get("k") is None


def test_zero_ttl_disables_cache() -> None:
    cache = TokenCache(ttl_seconds=0)
    cache.put("k", "tok-1")

    assert cache.enabled is False
    assert cache.get("k") is None


def test_key_does_not_contain_client_secret() -> None:
    key = TokenCache.make_key("https://api.test/", "client", "super-secret")

    assert "super-secret" not in key
    assert key.startswith("https://api.test|client|")
    assert key != TokenCache.make_key("https://api.test", "client", "other-secret")


def test_invalidate_and_clear() -> None:
    cache = TokenCache()
    cache.put("a", "tok-a")
    cache.put("b", "tok-b")

    cache.invalidate("a")
    assert cache.get("a") is None
    assert cache.get("b") == "tok-b"

    cache.clear()
    assert cache.get("b") is None
